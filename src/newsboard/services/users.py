"""Account creation, credential checks and profile lookup."""
from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from newsboard.core import security
from newsboard.models import User
from newsboard.schemas.user import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH
from newsboard.services.errors import Conflict, NotFound, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

__all__ = [
    "get_user",
    "get_by_username",
    "signup",
    "authenticate",
]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_by_username(db: Session, username: str) -> User:
    """Return the user with ``username``.

    Raises:
        NotFound: If nobody has that username.
    """
    user = db.scalars(select(User).where(User.username == username)).first()
    if user is None:
        raise NotFound("User not found")
    return user


def signup(db: Session, email: str, username: str, password: str) -> User:
    """Persist a new user with a hashed password.

    Raises:
        ValidationError: If the trimmed username is outside the allowed length.
        Conflict: If the email or username is already taken.
    """
    email = email.strip().lower()
    username = username.strip()
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
        )
    taken = db.scalars(
        select(User).where(or_(User.email == email, User.username == username))
    ).first()
    if taken is not None:
        raise Conflict("Email or username already exists")

    user = User(email=email, username=username, password_hash=security.hash_password(password))
    db.add(user)
    try:
        db.flush()
    except IntegrityError as exc:
        raise Conflict("Email or username already exists") from exc
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, username)
    return user


def authenticate(db: Session, email_or_username: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        Unauthorized: If no user matches or the password is wrong.
    """
    identifier = email_or_username.strip()
    user = db.scalars(
        select(User).where(or_(User.email == identifier.lower(), User.username == identifier))
    ).first()
    if user is None or not security.verify_password(password, user.password_hash):
        logger.info("Failed login attempt for %s", identifier)
        raise Unauthorized("Invalid credentials")
    return user
