"""Facility finder schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FacilityResponse(BaseModel):
    """A nearby hospital or clinic."""

    id: int
    name: str
    type: str
    lat: float
    lon: float
    address: str | None = None
    phone: str | None = None
    website: str | None = None

    model_config = ConfigDict(from_attributes=True)
