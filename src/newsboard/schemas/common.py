"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

import math
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict

from newsboard.db.time import as_utc

# SQLite hands timestamps back without a zone; every API timestamp is UTC.
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


class AuthorSummary(BaseModel):
    """Public identity attached to posts, comments and notifications."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    return math.ceil(total / limit) if limit else 0
