"""Version 1 API endpoints."""

from .endpoints import auth_router, groups_router, messages_router, users_router

__all__ = [
    "auth_router",
    "groups_router",
    "messages_router",
    "users_router",
]
