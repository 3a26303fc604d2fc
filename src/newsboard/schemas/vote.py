"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from newsboard.models.vote import VoteType


class VoteCreate(BaseModel):
    """Schema for casting a vote on a post or comment."""

    vote_type: VoteType = Field(..., description="UPVOTE or DOWNVOTE; repeating it removes the vote")


class VoteResult(BaseModel):
    """Actor's resulting stance and the target's recomputed points."""

    vote_type: VoteType | None
    points: int
