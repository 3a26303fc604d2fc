"""Post submission, lookup and ranked listings."""

from __future__ import annotations

import logging
from datetime import datetime
from urllib.parse import urlsplit

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from newsboard.core.settings import settings
from newsboard.db.time import as_utc, utcnow
from newsboard.models import Comment, Post, PostType, Vote, VoteType
from newsboard.schemas.common import AuthorSummary, total_pages
from newsboard.schemas.post import PostPage, PostResponse, SortMode
from newsboard.services import ranking
from newsboard.services.errors import NotFound, ValidationError
from newsboard.services.votes import TargetKind, votes_by_user

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 300

__all__ = ["create_post", "get_post", "list_posts", "search_terms", "to_post_response"]


def _is_absolute_url(value: str) -> bool:
    parts = urlsplit(value)
    return parts.scheme in {"http", "https"} and bool(parts.netloc)


def create_post(
    db: Session,
    actor_id: int,
    title: str,
    post_type: PostType,
    url: str | None = None,
    text_content: str | None = None,
) -> Post:
    """Validate and persist a new post.

    LINK posts need an absolute http(s) URL and no text; TEXT posts need text
    and no URL.

    Raises:
        ValidationError: If the title, URL or text break those rules.
    """
    title = (title or "").strip()
    url = (url or "").strip() or None
    text_content = (text_content or "").strip() or None

    if not title:
        raise ValidationError("Title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

    if post_type is PostType.LINK:
        if url is None:
            raise ValidationError("URL is required for link posts")
        if not _is_absolute_url(url):
            raise ValidationError("Invalid URL format")
        if text_content is not None:
            raise ValidationError("Link posts cannot include text content")
    else:
        if text_content is None:
            raise ValidationError("Text content is required for text posts")
        if url is not None:
            raise ValidationError("Text posts cannot include a URL")

    post = Post(
        title=title,
        type=post_type,
        url=url,
        text_content=text_content,
        author_id=actor_id,
    )
    db.add(post)
    db.flush()
    db.refresh(post)
    logger.info("User %s submitted %s post %s", actor_id, post_type.value, post.id)
    return post


def to_post_response(
    post: Post,
    points: int = 0,
    comment_count: int = 0,
    vote_type: VoteType | None = None,
    now: datetime | None = None,
) -> PostResponse:
    """Convert a Post ORM instance to an API schema."""
    return PostResponse(
        id=post.id,
        title=post.title,
        url=post.url,
        text_content=post.text_content,
        type=post.type,
        author=AuthorSummary.model_validate(post.author),
        points=points,
        comment_count=comment_count,
        created_at=post.created_at,
        rank_score=ranking.rank_score(points, post.created_at, settings.ranking_gravity, now),
        vote_type=vote_type,
        has_voted=vote_type is not None,
    )


def _points_subquery():
    return (
        select(Vote.post_id.label("post_id"), ranking.points_expression().label("points"))
        .where(Vote.post_id.is_not(None))
        .group_by(Vote.post_id)
        .subquery()
    )


def _comment_count_subquery():
    return (
        select(Comment.post_id.label("post_id"), func.count(Comment.id).label("comment_count"))
        .group_by(Comment.post_id)
        .subquery()
    )


def search_terms(search: str | None) -> list[str]:
    """Split a free-text query into the terms that must all match."""
    return (search or "").split()


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _filters(search: str | None, author_id: int | None) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    for term in search_terms(search):
        pattern = f"%{_escape_like(term)}%"
        clauses.append(
            or_(
                Post.title.ilike(pattern, escape="\\"),
                Post.text_content.ilike(pattern, escape="\\"),
            )
        )
    if author_id is not None:
        clauses.append(Post.author_id == author_id)
    return clauses


def _annotated_select(filters: list[ColumnElement[bool]]) -> tuple[Select, ColumnElement[int]]:
    points_sq = _points_subquery()
    comments_sq = _comment_count_subquery()
    points_col = func.coalesce(points_sq.c.points, 0)
    stmt = (
        select(
            Post,
            points_col.label("points"),
            func.coalesce(comments_sq.c.comment_count, 0).label("comment_count"),
        )
        .outerjoin(points_sq, points_sq.c.post_id == Post.id)
        .outerjoin(comments_sq, comments_sq.c.post_id == Post.id)
        .where(*filters)
    )
    return stmt, points_col


def get_post(db: Session, post_id: int, viewer_id: int | None = None) -> PostResponse:
    """Return one post annotated with points, comment count and the viewer's vote.

    Raises:
        NotFound: If the post does not exist.
    """
    stmt, _ = _annotated_select([Post.id == post_id])
    row = db.execute(stmt).first()
    if row is None:
        raise NotFound("Post not found")
    post, points, comment_count = row
    vote_type = None
    if viewer_id is not None:
        vote_type = votes_by_user(db, viewer_id, TargetKind.POST, [post.id]).get(post.id)
    return to_post_response(post, int(points), int(comment_count), vote_type)


def list_posts(
    db: Session,
    sort: SortMode = "new",
    page: int = 1,
    limit: int = 30,
    search: str | None = None,
    viewer_id: int | None = None,
    author_id: int | None = None,
) -> PostPage:
    """Return one page of posts in the requested order.

    ``new`` orders by creation time. ``top`` orders by net points (upvotes
    minus downvotes, not the raw number of votes cast) then recency. ``best``
    follows ``BEST_SORT_MODE``: ``votes`` matches ``top``, ``rank`` orders the
    newest ``RANKING_CANDIDATE_LIMIT`` posts by their decayed rank score.

    Args:
        db: Active session.
        sort: One of ``new``, ``top`` or ``best``.
        page: 1-based page number.
        limit: Page size.
        search: Whitespace separated terms; each must appear in the title or text.
        viewer_id: Optional user whose own votes are reported.
        author_id: Restrict to one author's posts.
    """
    filters = _filters(search, author_id)
    total = db.scalar(select(func.count()).select_from(Post).where(*filters)) or 0
    stmt, points_col = _annotated_select(filters)
    offset = (page - 1) * limit
    now = utcnow()

    if sort == "best" and settings.best_sort_mode == "rank":
        candidates = db.execute(
            stmt.order_by(Post.created_at.desc(), Post.id.desc()).limit(settings.ranking_candidate_limit)
        ).all()
        scored = [
            (
                ranking.rank_score(int(points), post.created_at, settings.ranking_gravity, now),
                post,
                int(points),
                int(comment_count),
            )
            for post, points, comment_count in candidates
        ]
        scored.sort(key=lambda item: (item[0], as_utc(item[1].created_at), item[1].id), reverse=True)
        rows = [(post, points, count) for _, post, points, count in scored[offset:offset + limit]]
        total = min(total, settings.ranking_candidate_limit)
    else:
        if sort == "new":
            stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        else:
            stmt = stmt.order_by(points_col.desc(), Post.created_at.desc(), Post.id.desc())
        rows = [
            (post, int(points), int(comment_count))
            for post, points, comment_count in db.execute(stmt.offset(offset).limit(limit)).all()
        ]

    viewer_votes = (
        votes_by_user(db, viewer_id, TargetKind.POST, [post.id for post, _, _ in rows])
        if viewer_id is not None
        else {}
    )
    return PostPage(
        posts=[
            to_post_response(post, points, count, viewer_votes.get(post.id), now)
            for post, points, count in rows
        ],
        page=page,
        limit=limit,
        total_pages=total_pages(total, limit),
        total_posts=total,
    )
