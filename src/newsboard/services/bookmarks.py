"""Bookmark registry: saved posts per user."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from newsboard.models import Bookmark, Post
from newsboard.services.errors import Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)

__all__ = ["create", "delete", "list_for_user", "check_many", "get_for_post"]


def get_for_post(db: Session, actor_id: int, post_id: int) -> Bookmark | None:
    """Return the actor's bookmark on a post, if any."""
    return db.scalars(
        select(Bookmark).where(Bookmark.user_id == actor_id, Bookmark.post_id == post_id)
    ).first()


def create(db: Session, actor_id: int, post_id: int) -> Bookmark:
    """Bookmark a post for the actor.

    Raises:
        NotFound: If the post does not exist.
        Conflict: If the actor already bookmarked the post.
    """
    if db.get(Post, post_id) is None:
        raise NotFound("Post not found")
    if get_for_post(db, actor_id, post_id) is not None:
        raise Conflict("Bookmark already exists")

    bookmark = Bookmark(user_id=actor_id, post_id=post_id)
    db.add(bookmark)
    try:
        db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent request for the same pair.
        raise Conflict("Bookmark already exists") from exc
    logger.info("User %s bookmarked post %s", actor_id, post_id)
    return bookmark


def delete(db: Session, bookmark_id: int, actor_id: int) -> None:
    """Remove one of the actor's bookmarks.

    Raises:
        NotFound: If the bookmark does not exist.
        Forbidden: If it belongs to someone else.
    """
    bookmark = db.get(Bookmark, bookmark_id)
    if bookmark is None:
        raise NotFound("Bookmark not found")
    if bookmark.user_id != actor_id:
        raise Forbidden("You can only delete your own bookmarks")
    db.delete(bookmark)
    db.flush()
    logger.info("User %s removed bookmark %s", actor_id, bookmark_id)


def list_for_user(db: Session, actor_id: int) -> list[Bookmark]:
    """Return the actor's bookmarks joined with their posts, newest first."""
    return list(
        db.scalars(
            select(Bookmark)
            .where(Bookmark.user_id == actor_id)
            .options(joinedload(Bookmark.post).joinedload(Post.author))
            .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        ).unique()
    )


def check_many(db: Session, actor_id: int, post_ids: Iterable[int]) -> dict[int, bool]:
    """Return ``{post_id: bookmarked}`` for every requested post id."""
    requested = list(post_ids)
    if not requested:
        return {}
    saved = set(
        db.scalars(
            select(Bookmark.post_id).where(
                Bookmark.user_id == actor_id,
                Bookmark.post_id.in_(requested),
            )
        )
    )
    return {post_id: post_id in saved for post_id in requested}
