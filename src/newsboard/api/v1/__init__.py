"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    bookmarks_router,
    comments_router,
    notifications_router,
    posts_router,
    users_router,
)

__all__ = [
    "auth_router",
    "posts_router",
    "comments_router",
    "notifications_router",
    "bookmarks_router",
    "users_router",
]
