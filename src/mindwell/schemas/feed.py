"""Wellness feed schemas."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class WellnessFeedResponse(BaseModel):
    """Articles exactly as supplied by the news service."""

    articles: list[dict[str, Any]] = Field(default_factory=list)
