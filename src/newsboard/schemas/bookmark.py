"""Bookmark Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from newsboard.schemas.common import UTCDateTime
from newsboard.schemas.post import PostSummary


class BookmarkCreate(BaseModel):
    post_id: int


class BookmarkResponse(BaseModel):
    """Bookmark row, optionally joined with its post."""

    id: int
    user_id: int
    post_id: int
    created_at: UTCDateTime
    post: PostSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class BookmarkLookup(BaseModel):
    """Single-post lookup result; ``bookmark`` is None when not saved."""

    bookmark: BookmarkResponse | None


class BookmarkCheckRequest(BaseModel):
    post_ids: list[int] = Field(..., description="Posts to annotate")
