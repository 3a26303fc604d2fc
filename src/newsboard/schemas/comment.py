"""Comment-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from newsboard.models.vote import VoteType
from newsboard.schemas.common import AuthorSummary, UTCDateTime


class CommentCreate(BaseModel):
    """Schema for adding a comment or a reply."""

    text_content: str = Field(..., min_length=1)
    parent_id: int | None = Field(None, description="Comment being replied to; omit for top level")


class CommentNode(BaseModel):
    """A comment annotated with points, the viewer's vote and its replies."""

    id: int
    text_content: str
    author: AuthorSummary
    post_id: int
    parent_id: int | None
    created_at: UTCDateTime
    points: int = 0
    vote_type: VoteType | None = None
    has_voted: bool = False
    replies: list[CommentNode] = Field(default_factory=list)
    # Set when replies exist below the depth cap and were left out.
    truncated: bool = False


CommentNode.model_rebuild()


class CommentThread(BaseModel):
    """Ordered forest of comments for one post."""

    comments: list[CommentNode]
