"""User and authentication Pydantic schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from newsboard.schemas.common import UTCDateTime

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20

Username = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
    ),
]


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    email: str = Field(
        ...,
        max_length=320,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="Unique email address",
    )
    username: Username = Field(..., description="Unique public handle")
    password: str = Field(..., min_length=6, description="Plaintext password, hashed on receipt")


class LoginRequest(BaseModel):
    """Credentials accepted by the login endpoint."""

    email_or_username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Account details returned to the account owner."""

    id: int
    email: str
    username: str
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """Public profile of any user."""

    id: int
    username: str
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """User record plus a freshly issued access token."""

    user: UserResponse
    token: str
