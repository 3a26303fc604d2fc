# tests/services/test_notifications.py
"""Tests for notification fan-out and the inbox."""

import pytest
from sqlalchemy import func, select

from newsboard.models import Notification, NotificationType
from newsboard.services import notifications
from newsboard.services.comments import create_comment
from newsboard.services.errors import Forbidden, NotFound


def _count(db_session, recipient_id: int) -> int:
    return db_session.scalar(
        select(func.count()).select_from(Notification).where(Notification.recipient_id == recipient_id)
    )


def test_comment_on_own_post_notifies_nobody(db_session, alice, alice_post) -> None:
    create_comment(db_session, alice.id, alice_post.id, "Answering myself")

    assert db_session.scalar(select(func.count()).select_from(Notification)) == 0


def test_reply_to_own_comment_notifies_nobody(db_session, bob, alice_post) -> None:
    """Self-replies stay silent, even on another user's post."""
    first = create_comment(db_session, bob.id, alice_post.id, "Thought one")
    create_comment(db_session, bob.id, alice_post.id, "Thought two", parent_id=first.id)

    assert _count(db_session, bob.id) == 0
    # only the top-level comment notified the post author
    assert _count(db_session, alice_post.author_id) == 1


def test_comment_and_reply_scenario(db_session, alice, bob, carol, alice_post) -> None:
    """B comments on A's post, then C replies to B's comment."""
    c1 = create_comment(db_session, bob.id, alice_post.id, "C1")
    c2 = create_comment(db_session, carol.id, alice_post.id, "C2", parent_id=c1.id)

    to_alice = db_session.scalars(
        select(Notification).where(Notification.recipient_id == alice.id)
    ).all()
    to_bob = db_session.scalars(
        select(Notification).where(Notification.recipient_id == bob.id)
    ).all()

    assert len(to_alice) == 1
    assert to_alice[0].type is NotificationType.NEW_COMMENT_ON_POST
    assert to_alice[0].triggering_user_id == bob.id
    assert to_alice[0].comment_id == c1.id

    assert len(to_bob) == 1
    assert to_bob[0].type is NotificationType.REPLY_TO_COMMENT
    assert to_bob[0].triggering_user_id == carol.id
    assert to_bob[0].comment_id == c2.id
    assert to_bob[0].post_id == alice_post.id
    assert _count(db_session, carol.id) == 0


def test_fan_out_is_idempotent(db_session, alice_post, bob, make_comment) -> None:
    """Fanning out the same comment twice reuses the existing row."""
    comment = make_comment(bob, alice_post)

    first = notifications.fan_out_comment(db_session, comment, alice_post)
    second = notifications.fan_out_comment(db_session, comment, alice_post)

    assert first is not None
    assert second.id == first.id
    assert _count(db_session, alice_post.author_id) == 1


def test_list_notifications_newest_first(db_session, alice, bob, carol, alice_post) -> None:
    create_comment(db_session, bob.id, alice_post.id, "from bob")
    create_comment(db_session, carol.id, alice_post.id, "from carol " + "x" * 200)

    page = notifications.list_notifications(db_session, alice.id)

    assert page.total_notifications == 2
    assert page.unread_count == 2
    assert page.total_pages == 1
    first, second = page.notifications
    assert first.id > second.id
    assert first.triggering_user.username == "carol"
    assert first.post.title == alice_post.title
    assert len(first.comment.text_content) == notifications.COMMENT_PREVIEW_LENGTH


def test_list_notifications_paginates(db_session, alice, make_user, alice_post) -> None:
    for _ in range(3):
        create_comment(db_session, make_user().id, alice_post.id, "hi")

    page = notifications.list_notifications(db_session, alice.id, page=2, limit=2)

    assert len(page.notifications) == 1
    assert page.total_pages == 2


def test_mark_read_is_idempotent(db_session, alice, bob, alice_post) -> None:
    create_comment(db_session, bob.id, alice_post.id, "ping")
    notification = db_session.scalars(select(Notification)).one()

    assert notifications.mark_read(db_session, notification.id, alice.id).read is True
    assert notifications.mark_read(db_session, notification.id, alice.id).read is True
    assert notifications.list_notifications(db_session, alice.id).unread_count == 0


def test_mark_read_rejects_other_users(db_session, bob, alice_post) -> None:
    create_comment(db_session, bob.id, alice_post.id, "ping")
    notification = db_session.scalars(select(Notification)).one()

    with pytest.raises(Forbidden):
        notifications.mark_read(db_session, notification.id, bob.id)
    with pytest.raises(NotFound):
        notifications.mark_read(db_session, 424242, bob.id)


def test_mark_all_read_counts_changes(db_session, alice, bob, carol, alice_post) -> None:
    create_comment(db_session, bob.id, alice_post.id, "one")
    create_comment(db_session, carol.id, alice_post.id, "two")

    assert notifications.mark_all_read(db_session, alice.id) == 2
    assert notifications.mark_all_read(db_session, alice.id) == 0
    assert notifications.mark_all_read(db_session, bob.id) == 0
