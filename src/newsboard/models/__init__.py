"""SQLAlchemy models for the newsboard application."""

from .bookmark import Bookmark
from .comment import Comment
from .notification import Notification, NotificationType
from .post import Post, PostType
from .user import User
from .vote import Vote, VoteType

__all__ = [
    "Bookmark",
    "Comment",
    "Notification", "NotificationType",
    "Post", "PostType",
    "User",
    "Vote", "VoteType",
]
