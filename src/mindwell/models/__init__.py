# src/mindwell/models/__init__.py
"""SQLAlchemy models for the MindWell application."""

from .letter import Letter, LetterReply
from .user import UserProfile

__all__ = [
    "Letter", "LetterReply",
    "UserProfile",
]
