"""Comment voting endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from newsboard.schemas.vote import VoteCreate, VoteResult
from newsboard.services.votes import VoteTarget, cast_vote

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/{comment_id}/vote", response_model=VoteResult)
async def vote_on_comment(
    comment_id: int,
    payload: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResult:
    """Cast, switch or withdraw the caller's vote on a comment."""
    result = cast_vote(db, current_user.id, VoteTarget.comment(comment_id), payload.vote_type)
    db.commit()
    return result
