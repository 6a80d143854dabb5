"""Nearby facility lookup endpoint."""

from fastapi import APIRouter, Query

from mindwell.api.v1.dependencies import FacilityFinderDep, http_error
from mindwell.core.errors import MindWellError
from mindwell.schemas.facility import FacilityResponse
from mindwell.services.facilities import Facility

router = APIRouter(prefix="/facilities", tags=["facilities"])


@router.get("", response_model=list[FacilityResponse])
async def nearby_facilities(
    finder: FacilityFinderDep,
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude"),
) -> list[Facility]:
    """Return named hospitals and clinics around the given coordinates."""
    try:
        return await finder.find(lat, lng)
    except MindWellError as exc:
        raise http_error(exc) from exc
