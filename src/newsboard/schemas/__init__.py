"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .bookmark import BookmarkCheckRequest, BookmarkCreate, BookmarkLookup, BookmarkResponse
from .comment import CommentCreate, CommentNode, CommentThread
from .common import AuthorSummary
from .notification import MarkAllReadResponse, NotificationPage, NotificationResponse
from .post import PostCreate, PostPage, PostResponse, PostSummary
from .user import AuthResponse, LoginRequest, ProfileResponse, SignupRequest, UserResponse
from .vote import VoteCreate, VoteResult

__all__ = [
    "AuthorSummary",
    "BookmarkCheckRequest", "BookmarkCreate", "BookmarkLookup", "BookmarkResponse",
    "CommentCreate", "CommentNode", "CommentThread",
    "MarkAllReadResponse", "NotificationPage", "NotificationResponse",
    "PostCreate", "PostPage", "PostResponse", "PostSummary",
    "AuthResponse", "LoginRequest", "ProfileResponse", "SignupRequest", "UserResponse",
    "VoteCreate", "VoteResult",
]
