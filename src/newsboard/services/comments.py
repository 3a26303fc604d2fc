"""Threaded comments: creation with notification fan-out and forest retrieval."""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from newsboard.core.settings import settings
from newsboard.models import Comment, Post, VoteType
from newsboard.schemas.comment import CommentNode
from newsboard.schemas.common import AuthorSummary
from newsboard.services import notifications, ranking
from newsboard.services.errors import NotFound, ValidationError
from newsboard.services.votes import TargetKind, votes_by_user

logger = logging.getLogger(__name__)

__all__ = ["create_comment", "fetch_thread", "to_comment_node"]


def to_comment_node(
    comment: Comment,
    points: int = 0,
    vote_type: VoteType | None = None,
) -> CommentNode:
    """Convert a Comment ORM instance to an unnested API node."""
    return CommentNode(
        id=comment.id,
        text_content=comment.text_content,
        author=AuthorSummary.model_validate(comment.author),
        post_id=comment.post_id,
        parent_id=comment.parent_id,
        created_at=comment.created_at,
        points=points,
        vote_type=vote_type,
        has_voted=vote_type is not None,
    )


def create_comment(
    db: Session,
    actor_id: int,
    post_id: int,
    text: str,
    parent_id: int | None = None,
) -> CommentNode:
    """Create a comment or reply and notify the affected author.

    The comment and its notification are flushed in the same session, so they
    are committed (or discarded) together.

    Args:
        db: Active session; the caller owns the commit.
        actor_id: Verified id of the commenting user.
        post_id: Post the comment belongs to.
        text: Comment body; surrounding whitespace is stripped.
        parent_id: Comment being replied to, or None for a top-level comment.

    Returns:
        The new comment with zero points, no vote and no replies.

    Raises:
        ValidationError: If the text is blank or the parent is on another post.
        NotFound: If the post or the parent comment does not exist.
    """
    body = (text or "").strip()
    if not body:
        raise ValidationError("Comment text must not be empty")

    post = db.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found")

    parent: Comment | None = None
    if parent_id is not None:
        parent = db.get(Comment, parent_id)
        if parent is None:
            raise NotFound("Parent comment not found")
        if parent.post_id != post.id:
            raise ValidationError("Parent comment belongs to a different post")

    comment = Comment(
        text_content=body,
        author_id=actor_id,
        post_id=post.id,
        parent_id=parent.id if parent else None,
    )
    db.add(comment)
    db.flush()
    db.refresh(comment)

    notifications.fan_out_comment(db, comment, post, parent)
    logger.info("User %s commented %s on post %s (parent=%s)", actor_id, comment.id, post.id, parent_id)
    return to_comment_node(comment)


def fetch_thread(
    db: Session,
    post_id: int,
    viewer_id: int | None = None,
    max_depth: int | None = None,
) -> list[CommentNode]:
    """Return the comment forest of a post, annotated for the viewer.

    All comments are loaded in one query and linked through a parent to
    children index, then walked with an explicit stack. Top-level comments are
    newest first; replies read oldest first.

    Args:
        db: Active session.
        post_id: Post whose comments are returned.
        viewer_id: Optional user whose own votes are reported on every node.
        max_depth: Number of levels to emit, top level counted as 1. Defaults
            to ``COMMENT_THREAD_MAX_DEPTH``. Nodes whose replies fall below the
            cap are marked ``truncated``.

    Raises:
        NotFound: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise NotFound("Post not found")

    depth_cap = max_depth if max_depth is not None else settings.comment_thread_max_depth
    depth_cap = max(1, min(depth_cap, settings.comment_thread_max_depth))

    rows = db.scalars(
        select(Comment)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
    ).all()
    if not rows:
        return []

    ids = [row.id for row in rows]
    points = ranking.points_by_comment(db, ids)
    viewer_votes = votes_by_user(db, viewer_id, TargetKind.COMMENT, ids) if viewer_id else {}

    children: dict[int | None, list[Comment]] = defaultdict(list)
    for row in rows:
        children[row.parent_id].append(row)

    roots = list(reversed(children[None]))
    nodes: dict[int, CommentNode] = {}
    forest: list[CommentNode] = []

    # (comment, depth) pairs; reversed pushes keep output order on pop.
    stack: list[tuple[Comment, int]] = [(root, 1) for root in reversed(roots)]
    while stack:
        comment, depth = stack.pop()
        node = to_comment_node(comment, points.get(comment.id, 0), viewer_votes.get(comment.id))
        nodes[comment.id] = node
        if comment.parent_id is None:
            forest.append(node)
        else:
            nodes[comment.parent_id].replies.append(node)

        replies = children.get(comment.id, [])
        if not replies:
            continue
        if depth >= depth_cap:
            node.truncated = True
            continue
        stack.extend((reply, depth + 1) for reply in reversed(replies))

    return forest
