"""Point totals and time-decayed rank scores.

Points are never stored: they are counted from the vote ledger on every read,
so they cannot drift from the votes that produce them.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from newsboard.db.time import as_utc, utcnow
from newsboard.models import Vote, VoteType

DEFAULT_GRAVITY = 1.8

__all__ = [
    "DEFAULT_GRAVITY",
    "points_expression",
    "points_for_post",
    "points_for_comment",
    "points_by_post",
    "points_by_comment",
    "rank_score",
]


def points_expression() -> ColumnElement[int]:
    """SQL expression summing +1 per upvote and -1 per downvote."""
    return func.coalesce(
        func.sum(case((Vote.vote_type == VoteType.UPVOTE, 1), else_=-1)),
        0,
    )


def points_for_post(db: Session, post_id: int) -> int:
    """Return upvotes minus downvotes for one post."""
    return int(db.scalar(select(points_expression()).where(Vote.post_id == post_id)) or 0)


def points_for_comment(db: Session, comment_id: int) -> int:
    """Return upvotes minus downvotes for one comment."""
    return int(db.scalar(select(points_expression()).where(Vote.comment_id == comment_id)) or 0)


def points_by_post(db: Session, post_ids: Iterable[int]) -> dict[int, int]:
    """Return ``{post_id: points}`` for the given posts; unvoted posts are absent."""
    ids = list(post_ids)
    if not ids:
        return {}
    rows = db.execute(
        select(Vote.post_id, points_expression())
        .where(Vote.post_id.in_(ids))
        .group_by(Vote.post_id)
    ).all()
    return {post_id: int(points) for post_id, points in rows}


def points_by_comment(db: Session, comment_ids: Iterable[int]) -> dict[int, int]:
    """Return ``{comment_id: points}`` for the given comments; unvoted ones are absent."""
    ids = list(comment_ids)
    if not ids:
        return {}
    rows = db.execute(
        select(Vote.comment_id, points_expression())
        .where(Vote.comment_id.in_(ids))
        .group_by(Vote.comment_id)
    ).all()
    return {comment_id: int(points) for comment_id, points in rows}


def rank_score(
    points: int,
    created_at: datetime,
    gravity: float = DEFAULT_GRAVITY,
    now: datetime | None = None,
) -> float:
    """Compute a Hacker News style rank: ``(P - 1) / (T + 2) ^ G``.

    Args:
        points: Upvotes minus downvotes.
        created_at: Creation time of the item. Naive values are read as UTC.
        gravity: Decay exponent; larger values sink older items faster.
        now: Reference time, defaults to the current UTC time.

    Returns:
        A non-negative score. Items with one point or fewer always score 0,
        and the score never increases as the item ages.
    """
    reference = as_utc(now) if now is not None else utcnow()
    age_hours = max(0.0, (reference - as_utc(created_at)).total_seconds() / 3600)
    numerator = max(points - 1, 0)
    denominator = math.pow(age_hours + 2, gravity)
    if denominator == 0:
        return math.inf if numerator > 0 else 0.0
    return numerator / denominator
