"""Authentication endpoints for the newsboard API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from newsboard.core.security import create_access_token
from newsboard.core.settings import settings
from newsboard.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserResponse
from newsboard.services import users as user_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return it with an access token."""
    user = user_service.signup(db, payload.email, payload.username, payload.password)
    db.commit()
    db.refresh(user)
    return AuthResponse(user=UserResponse.model_validate(user), token=create_access_token(user.id))


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, response: Response, db: SessionDep) -> AuthResponse:
    """Verify credentials, set the auth cookie and return an access token."""
    user = user_service.authenticate(db, payload.email_or_username, payload.password)
    token = create_access_token(user.id)
    _set_auth_cookie(response, token)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/logout")
async def logout(response: Response) -> dict[str, str]:
    """Clear the auth cookie."""
    response.delete_cookie(settings.auth_cookie_name, path="/")
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the authenticated account."""
    return UserResponse.model_validate(current_user)
