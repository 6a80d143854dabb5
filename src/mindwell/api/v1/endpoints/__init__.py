# src/mindwell/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .ai_chat import router as ai_chat_router
from .chatbot import router as chatbot_router
from .facilities import router as facilities_router
from .letters import router as letters_router
from .users import router as users_router
from .wellness_feed import router as wellness_feed_router

__all__ = [
    "letters_router",
    "chatbot_router",
    "ai_chat_router",
    "facilities_router",
    "wellness_feed_router",
    "users_router",
]
