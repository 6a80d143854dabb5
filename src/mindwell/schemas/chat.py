"""Chatbot and AI assistant schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mindwell.core.settings import settings


class ChatbotRequest(BaseModel):
    """Message for the rule-based chatbot."""

    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(..., min_length=1, max_length=settings.chatbot_max_length)


class ChatbotResponse(BaseModel):
    """Canned reply plus the emotion it was chosen for."""

    reply: str
    emotion: str


class AIChatRequest(BaseModel):
    """Message for the generative wellness assistant."""

    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(..., min_length=1, max_length=settings.chatbot_max_length)


class AIChatResponse(BaseModel):
    """Assistant answer."""

    response: str
