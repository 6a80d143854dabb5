"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .chat import AIChatRequest, AIChatResponse, ChatbotRequest, ChatbotResponse
from .common import MessageResponse
from .facility import FacilityResponse
from .feed import WellnessFeedResponse
from .letter import (
    LetterCreate,
    LetterCreated,
    LetterDelete,
    LetterResponse,
    LikeResponse,
    ReplyCreate,
    ReplyResponse,
)
from .user import ProfileResponse, ProfileUpdate, ProfileUpdated

__all__ = [
    "AIChatRequest", "AIChatResponse", "ChatbotRequest", "ChatbotResponse",
    "MessageResponse",
    "FacilityResponse",
    "WellnessFeedResponse",
    "LetterCreate", "LetterCreated", "LetterDelete", "LetterResponse", "LikeResponse",
    "ReplyCreate", "ReplyResponse",
    "ProfileResponse", "ProfileUpdate", "ProfileUpdated",
]
