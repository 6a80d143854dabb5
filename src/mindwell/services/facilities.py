"""Nearby hospital and clinic lookup through the Overpass geodata API."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from mindwell.core.errors import MindWellError, UpstreamError
from mindwell.core.settings import settings

logger = logging.getLogger(__name__)

HTTP_BAD_REQUEST = 400
HTTP_TOO_MANY_REQUESTS = 429
HTTP_GATEWAY_TIMEOUT = 504


class FacilityLookupError(MindWellError):
    """Overpass rejected or failed the query; carries the status to report."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class FacilityConfig:
    """Immutable configuration for facility lookups."""

    overpass_url: str
    radius_meters: int
    timeout_seconds: float
    user_agent: str


@dataclass(frozen=True)
class Facility:
    """A named hospital or clinic near the requested point."""

    id: int
    name: str
    type: str
    lat: float
    lon: float
    address: str | None
    phone: str | None
    website: str | None


def load_facility_config() -> FacilityConfig:
    """Build configuration object from global settings."""
    return FacilityConfig(
        overpass_url=settings.overpass_url,
        radius_meters=settings.facility_radius_meters,
        timeout_seconds=float(settings.facility_timeout_seconds),
        user_agent=settings.http_user_agent,
    )


def build_overpass_query(lat: float, lng: float, radius_meters: int) -> str:
    """Return an Overpass QL query for named hospitals and clinics around a point."""
    around = f"around:{radius_meters},{lat},{lng}"
    selector = '["amenity"~"^(hospital|clinic)$"]["name"]'
    return (
        "[out:json][timeout:30];\n"
        "(\n"
        f"  node{selector}({around});\n"
        f"  way{selector}({around});\n"
        f"  relation{selector}({around});\n"
        ");\n"
        "out center;"
    )


def _format_address(tags: Mapping[str, Any]) -> str | None:
    street = f"{tags.get('addr:housenumber', '')} {tags.get('addr:street', '')}".strip()
    parts = [street, tags.get("addr:city"), tags.get("addr:postcode")]
    return ", ".join(str(part) for part in parts if part) or None


def normalize_elements(elements: Iterable[Mapping[str, Any]]) -> list[Facility]:
    """Convert Overpass elements to facilities.

    Ways and relations use their ``center``; elements without numeric
    coordinates are skipped, and facilities sharing coordinates collapse to
    the last one seen.
    """
    unique: dict[str, Facility] = {}
    for element in elements:
        if not isinstance(element, Mapping):
            continue
        coords = element.get("center") or {"lat": element.get("lat"), "lon": element.get("lon")}
        if not isinstance(coords, Mapping):
            continue
        lat, lon = coords.get("lat"), coords.get("lon")
        if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
            continue

        tags = element.get("tags")
        if not isinstance(tags, Mapping):
            tags = {}
        facility = Facility(
            id=int(element.get("id", 0)),
            name=tags.get("name") or "Unnamed Facility",
            type=tags.get("amenity") or "facility",
            lat=float(lat),
            lon=float(lon),
            address=_format_address(tags),
            phone=tags.get("phone") or tags.get("contact:phone"),
            website=tags.get("website") or tags.get("contact:website"),
        )
        unique[f"{facility.lat},{facility.lon}"] = facility
    return list(unique.values())


class FacilityFinder:
    """Queries Overpass for facilities near a coordinate."""

    def __init__(
        self,
        config: FacilityConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_facility_config()
        self._transport = transport

    async def find(self, lat: float, lng: float) -> list[Facility]:
        """Return named hospitals and clinics within the configured radius.

        Raises:
            FacilityLookupError: For rate limiting, query errors and upstream timeouts.
            UpstreamError: For any other transport or response failure.
        """
        query = build_overpass_query(lat, lng, self.config.radius_meters)
        logger.info("Fetching facilities near (%s, %s) from Overpass API", lat, lng)

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={"User-Agent": self.config.user_agent},
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(self.config.overpass_url, params={"data": query})
            except httpx.TimeoutException as exc:
                raise FacilityLookupError(
                    "Overpass API timeout. The server is busy or the query is too complex.",
                    HTTP_GATEWAY_TIMEOUT,
                ) from exc
            except httpx.HTTPError as exc:
                logger.error("Error fetching facilities from Overpass API: %s", exc)
                raise UpstreamError("Failed to fetch nearby facilities.") from exc

        if response.status_code == HTTP_TOO_MANY_REQUESTS:
            raise FacilityLookupError(
                "Overpass API rate limit exceeded. Please try again later.",
                HTTP_TOO_MANY_REQUESTS,
            )
        if response.status_code == HTTP_BAD_REQUEST:
            raise FacilityLookupError(
                "Overpass API query error. Check query syntax or parameters.",
                HTTP_BAD_REQUEST,
            )
        if response.status_code == HTTP_GATEWAY_TIMEOUT:
            raise FacilityLookupError(
                "Overpass API timeout. The server is busy or the query is too complex.",
                HTTP_GATEWAY_TIMEOUT,
            )
        if response.is_error:
            logger.error("Overpass API responded with %d", response.status_code)
            raise UpstreamError("Failed to fetch nearby facilities.")

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError("Failed to fetch nearby facilities.") from exc

        elements = payload.get("elements") if isinstance(payload, Mapping) else None
        if not elements:
            logger.warning("Overpass API returned no elements or invalid data.")
            return []

        facilities = normalize_elements(elements)
        logger.info("Found %d facilities.", len(facilities))
        return facilities
