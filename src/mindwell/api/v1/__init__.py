# src/mindwell/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    ai_chat_router,
    chatbot_router,
    facilities_router,
    letters_router,
    users_router,
    wellness_feed_router,
)

__all__ = [
    "letters_router",
    "chatbot_router",
    "ai_chat_router",
    "facilities_router",
    "wellness_feed_router",
    "users_router",
]
