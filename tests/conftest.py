# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from itertools import count

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from newsboard.core.security import create_access_token, hash_password  # noqa: E402
from newsboard.db.session import Base, enable_sqlite_foreign_keys  # noqa: E402
from newsboard.db.session import get_db as app_get_session  # noqa: E402
from newsboard.main import app as fastapi_app  # noqa: E402
from newsboard.models import Comment, Post, PostType, User  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse"

# bcrypt is deliberately slow; hash once for every fixture user.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)
_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite needs explicit BEGIN for SAVEPOINT to behave.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN")

    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""

    def _make(username: str | None = None) -> User:
        n = next(_USER_COUNTER)
        name = username or f"user{n}"
        user = User(email=f"{name}@example.com", username=name, password_hash=_PASSWORD_HASH)
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol")


def auth_headers_for(user: User) -> dict[str, str]:
    """Return authorization headers carrying a token for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers_for(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers_for(bob)


@pytest.fixture()
def carol_headers(carol: User) -> dict[str, str]:
    return auth_headers_for(carol)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory for TEXT posts (or LINK posts when ``url`` is given)."""

    def _make(
        author: User,
        title: str = "Show HN: a thing",
        text: str | None = "Body text",
        url: str | None = None,
        created_at: datetime | None = None,
    ) -> Post:
        post = Post(
            title=title,
            type=PostType.LINK if url else PostType.TEXT,
            url=url,
            text_content=None if url else text,
            author_id=author.id,
        )
        if created_at is not None:
            post.created_at = created_at
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def alice_post(make_post: Callable[..., Post], alice: User) -> Post:
    """A TEXT post written by alice."""
    return make_post(alice, title="Alice asks a question", text="What should I build?")


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Return a factory that inserts comments directly, bypassing fan-out."""

    def _make(author: User, post: Post, text: str = "A comment", parent: Comment | None = None) -> Comment:
        comment = Comment(
            text_content=text,
            author_id=author.id,
            post_id=post.id,
            parent_id=parent.id if parent else None,
        )
        db_session.add(comment)
        db_session.flush()
        db_session.refresh(comment)
        return comment

    return _make


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building auth headers for any user."""
    return auth_headers_for


@pytest.fixture()
def password() -> str:
    """Plaintext password shared by every fixture user."""
    return TEST_PASSWORD
