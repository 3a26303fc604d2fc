"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from newsboard.core.security import decode_access_token
from newsboard.core.settings import settings
from newsboard.db.session import get_db
from newsboard.models import User

# Bearer tokens are optional so the cookie can act as a fallback.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _token_from_request(
    credentials: HTTPAuthorizationCredentials | None,
    cookie_token: str | None,
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return cookie_token or None


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
    auth_token: Annotated[str | None, Cookie(alias=settings.auth_cookie_name)] = None,
) -> User | None:
    """Resolve the viewer from a bearer token or the auth cookie.

    Returns None for anonymous requests and for tokens that do not verify, so
    read endpoints degrade to the anonymous view.
    """
    token = _token_from_request(credentials, auth_token)
    if token is None:
        return None
    user_id = decode_access_token(token)
    if user_id is None:
        return None
    return db.get(User, user_id)


def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Require an authenticated user.

    Raises:
        HTTPException: 401 if no valid token was presented.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: User not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# Type aliases for user dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def viewer_id(user: User | None) -> int | None:
    """Return the id of an optional viewer."""
    return user.id if user is not None else None
