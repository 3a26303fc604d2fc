"""Vote ledger: one current vote per (user, target)."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import InstrumentedAttribute

from newsboard.models import Comment, Post, Vote, VoteType
from newsboard.schemas.vote import VoteResult
from newsboard.services import ranking
from newsboard.services.errors import Conflict, NotFound

logger = logging.getLogger(__name__)

__all__ = ["TargetKind", "VoteTarget", "cast_vote", "get_vote_state", "votes_by_user"]


class TargetKind(str, enum.Enum):
    """Kind of entity a vote points at."""

    POST = "post"
    COMMENT = "comment"


@dataclass(frozen=True)
class VoteTarget:
    """A post or a comment, addressed by kind and id."""

    kind: TargetKind
    id: int

    @classmethod
    def post(cls, post_id: int) -> VoteTarget:
        return cls(TargetKind.POST, post_id)

    @classmethod
    def comment(cls, comment_id: int) -> VoteTarget:
        return cls(TargetKind.COMMENT, comment_id)

    @property
    def column(self) -> InstrumentedAttribute[int | None]:
        """Vote column that references this target."""
        return Vote.post_id if self.kind is TargetKind.POST else Vote.comment_id

    @property
    def model(self) -> type[Post] | type[Comment]:
        return Post if self.kind is TargetKind.POST else Comment

    def points(self, db: Session) -> int:
        if self.kind is TargetKind.POST:
            return ranking.points_for_post(db, self.id)
        return ranking.points_for_comment(db, self.id)


def _ensure_target_exists(db: Session, target: VoteTarget) -> None:
    if db.get(target.model, target.id) is None:
        raise NotFound(f"{target.kind.value.capitalize()} not found")


def _find_vote(db: Session, actor_id: int, target: VoteTarget, *, lock: bool = False) -> Vote | None:
    stmt = select(Vote).where(Vote.user_id == actor_id, target.column == target.id)
    if lock:
        stmt = stmt.with_for_update()
    return db.scalars(stmt).first()


def cast_vote(db: Session, actor_id: int, target: VoteTarget, vote_type: VoteType) -> VoteResult:
    """Apply a vote with toggle semantics and return the resulting state.

    Repeating the current vote type removes the vote, a different type
    switches the existing row in place, and no prior vote inserts a new row.

    Args:
        db: Active session; the caller owns the commit.
        actor_id: Verified id of the voting user.
        target: Post or comment being voted on.
        vote_type: Requested direction.

    Returns:
        The actor's vote type after the call (None once toggled off) and the
        target's recomputed points.

    Raises:
        NotFound: If the target does not exist.
        Conflict: If a concurrent request wrote a vote for the same pair first.
    """
    _ensure_target_exists(db, target)

    existing = _find_vote(db, actor_id, target, lock=True)
    resulting: VoteType | None
    if existing is not None and existing.vote_type == vote_type:
        db.delete(existing)
        resulting = None
    elif existing is not None:
        existing.vote_type = vote_type
        resulting = vote_type
    else:
        vote = Vote(user_id=actor_id, vote_type=vote_type)
        if target.kind is TargetKind.POST:
            vote.post_id = target.id
        else:
            vote.comment_id = target.id
        db.add(vote)
        resulting = vote_type

    try:
        db.flush()
    except IntegrityError as exc:
        logger.warning(
            "Concurrent vote detected for user %s on %s %s",
            actor_id,
            target.kind.value,
            target.id,
        )
        raise Conflict("Vote was changed by another request; retry") from exc

    points = target.points(db)
    logger.info(
        "User %s vote on %s %s is now %s (points=%d)",
        actor_id,
        target.kind.value,
        target.id,
        resulting.value if resulting else None,
        points,
    )
    return VoteResult(vote_type=resulting, points=points)


def get_vote_state(db: Session, actor_id: int, target: VoteTarget) -> VoteType | None:
    """Return the actor's current vote type on a target, or None."""
    vote = _find_vote(db, actor_id, target)
    return vote.vote_type if vote else None


def votes_by_user(
    db: Session,
    actor_id: int,
    kind: TargetKind,
    target_ids: list[int],
) -> dict[int, VoteType]:
    """Return ``{target_id: vote_type}`` for the targets the actor has voted on."""
    if not target_ids:
        return {}
    column = Vote.post_id if kind is TargetKind.POST else Vote.comment_id
    rows = db.execute(
        select(column, Vote.vote_type).where(Vote.user_id == actor_id, column.in_(target_ids))
    ).all()
    return {target_id: vote_type for target_id, vote_type in rows}
