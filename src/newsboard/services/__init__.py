"""Business logic services for the newsboard application."""

from .errors import Conflict, Forbidden, NotFound, ServiceError, Unauthorized, ValidationError
from .votes import TargetKind, VoteTarget, cast_vote

__all__ = [
    "ServiceError",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "ValidationError",
    "Conflict",
    "TargetKind",
    "VoteTarget",
    "cast_vote",
]
