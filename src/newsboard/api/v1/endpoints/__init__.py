"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .bookmarks import router as bookmarks_router
from .comments import router as comments_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "bookmarks_router",
    "comments_router",
    "notifications_router",
    "posts_router",
    "users_router",
]
