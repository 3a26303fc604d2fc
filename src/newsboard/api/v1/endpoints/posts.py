"""Post-related endpoints for the newsboard API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from newsboard.schemas.comment import CommentCreate, CommentNode, CommentThread
from newsboard.schemas.post import PostCreate, PostPage, PostResponse, SortMode
from newsboard.schemas.vote import VoteCreate, VoteResult
from newsboard.services import comments as comment_service
from newsboard.services import posts as post_service
from newsboard.services.votes import VoteTarget, cast_vote

from ..dependencies import CurrentUserDep, OptionalUserDep, SessionDep, viewer_id

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=PostPage)
async def list_posts(
    db: SessionDep,
    viewer: OptionalUserDep,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Posts per page")] = 30,
    sort: Annotated[SortMode, Query(description="new, top or best")] = "new",
    search: Annotated[str | None, Query(description="Terms that must all match")] = None,
) -> PostPage:
    """List posts with sorting, search and pagination."""
    return post_service.list_posts(
        db,
        sort=sort,
        page=page,
        limit=limit,
        search=search,
        viewer_id=viewer_id(viewer),
    )


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Submit a LINK or TEXT post."""
    post = post_service.create_post(
        db,
        current_user.id,
        payload.title,
        payload.type,
        url=payload.url,
        text_content=payload.text_content,
    )
    db.commit()
    return post_service.get_post(db, post.id, current_user.id)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep, viewer: OptionalUserDep) -> PostResponse:
    """Get a specific post by ID."""
    return post_service.get_post(db, post_id, viewer_id(viewer))


@router.post("/{post_id}/vote", response_model=VoteResult)
async def vote_on_post(
    post_id: int,
    payload: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResult:
    """Cast, switch or withdraw the caller's vote on a post."""
    result = cast_vote(db, current_user.id, VoteTarget.post(post_id), payload.vote_type)
    db.commit()
    return result


@router.get("/{post_id}/comments", response_model=CommentThread)
async def list_comments(
    post_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
    depth: Annotated[int | None, Query(ge=1, description="Levels of replies to include")] = None,
) -> CommentThread:
    """Return the threaded comments of a post."""
    forest = comment_service.fetch_thread(db, post_id, viewer_id(viewer), max_depth=depth)
    return CommentThread(comments=forest)


@router.post(
    "/{post_id}/comments",
    response_model=CommentNode,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentNode:
    """Add a comment or reply; the notification it triggers commits with it."""
    node = comment_service.create_comment(
        db,
        current_user.id,
        post_id,
        payload.text_content,
        parent_id=payload.parent_id,
    )
    db.commit()
    return node
