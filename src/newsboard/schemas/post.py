"""Post-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from newsboard.models.post import PostType
from newsboard.models.vote import VoteType
from newsboard.schemas.common import AuthorSummary, UTCDateTime

SortMode = Literal["new", "top", "best"]


class PostCreate(BaseModel):
    """Schema for submitting a new post."""

    title: str = Field(..., min_length=1, max_length=300)
    type: PostType
    url: str | None = Field(None, description="Absolute URL, required for LINK posts")
    text_content: str | None = Field(None, description="Body text, required for TEXT posts")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    url: str | None
    text_content: str | None
    type: PostType
    author: AuthorSummary
    points: int = 0
    comment_count: int = 0
    created_at: UTCDateTime
    rank_score: float = 0.0
    vote_type: VoteType | None = None
    has_voted: bool = False

    model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
    """Compact post representation embedded in bookmarks."""

    id: int
    title: str
    url: str | None
    text_content: str | None
    type: PostType
    author: AuthorSummary
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class PostPage(BaseModel):
    """One page of a post listing."""

    posts: list[PostResponse]
    page: int
    limit: int
    total_pages: int
    total_posts: int
