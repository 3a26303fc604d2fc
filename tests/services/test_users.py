# tests/services/test_users.py
"""Tests for account creation and authentication."""

import pytest

from newsboard.core.security import verify_password
from newsboard.services import users
from newsboard.services.errors import Conflict, NotFound, Unauthorized, ValidationError


def test_signup_hashes_password(db_session) -> None:
    user = users.signup(db_session, "Dana@Example.com", "dana", "s3cret-pass")

    assert user.id is not None
    assert user.email == "dana@example.com"
    assert user.password_hash != "s3cret-pass"
    assert verify_password("s3cret-pass", user.password_hash)


@pytest.mark.parametrize("username", ["  ab  ", "ab", "x" * 21, "   "])
def test_signup_enforces_trimmed_username_length(db_session, username) -> None:
    """Surrounding whitespace does not count toward the 3-20 character limit."""
    with pytest.raises(ValidationError):
        users.signup(db_session, "quinn@example.com", username, "secret1")


def test_signup_stores_trimmed_username(db_session) -> None:
    user = users.signup(db_session, "quinn@example.com", "  quinn  ", "secret1")
    assert user.username == "quinn"


def test_signup_rejects_taken_identity(db_session, alice) -> None:
    with pytest.raises(Conflict):
        users.signup(db_session, "other@example.com", "alice", "whatever1")
    with pytest.raises(Conflict):
        users.signup(db_session, "ALICE@example.com", "someone", "whatever1")


@pytest.mark.parametrize("identifier", ["alice", "alice@example.com"])
def test_authenticate_by_username_or_email(db_session, alice, password, identifier) -> None:
    assert users.authenticate(db_session, identifier, password).id == alice.id


def test_authenticate_rejects_bad_credentials(db_session, alice, password) -> None:
    with pytest.raises(Unauthorized):
        users.authenticate(db_session, "alice", "wrong-password")
    with pytest.raises(Unauthorized):
        users.authenticate(db_session, "nobody", password)


def test_get_by_username(db_session, alice) -> None:
    assert users.get_by_username(db_session, "alice").id == alice.id
    assert users.get_user(db_session, alice.id).username == "alice"
    with pytest.raises(NotFound):
        users.get_by_username(db_session, "ghost")
