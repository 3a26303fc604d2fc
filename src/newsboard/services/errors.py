"""Typed failures raised by the service layer.

The API layer maps each class to an HTTP status; services never build HTTP
responses themselves.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class Unauthorized(ServiceError):
    """No verified actor where one is required."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ServiceError):
    """Actor is known but not entitled to touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ServiceError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(ServiceError):
    """Input is well-formed JSON but violates a domain rule."""

    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(ServiceError):
    """Write would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT
