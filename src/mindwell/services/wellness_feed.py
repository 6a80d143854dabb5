"""Wellness news feed sourced from NewsAPI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from mindwell.core.errors import UpstreamError, UpstreamUnavailable
from mindwell.core.settings import settings

logger = logging.getLogger(__name__)

FEED_FAILURE = "Failed to fetch wellness feed. Please try again later."


@dataclass(frozen=True)
class NewsConfig:
    """Immutable configuration for the news search."""

    api_key: str | None
    url: str
    query: str
    page_size: int
    timeout_seconds: float
    language: str = "en"
    sort_by: str = "publishedAt"


def load_news_config() -> NewsConfig:
    """Build configuration object from global settings."""
    return NewsConfig(
        api_key=settings.news_api_key,
        url=settings.news_api_url,
        query=settings.news_query,
        page_size=settings.news_page_size,
        timeout_seconds=float(settings.news_timeout_seconds),
    )


class WellnessFeedClient:
    """Fetches recent mental-health and wellness articles."""

    def __init__(
        self,
        config: NewsConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_news_config()
        self._transport = transport

    async def fetch(self) -> list[dict[str, Any]]:
        """Return the latest matching articles as provided by NewsAPI.

        Raises:
            UpstreamUnavailable: If no API key is configured.
            UpstreamError: If the request fails or NewsAPI reports an error.
        """
        if not self.config.api_key:
            logger.error("NEWS_API_KEY is not set in environment variables.")
            raise UpstreamUnavailable("Server configuration error: News API key missing.")

        params = {
            "q": self.config.query,
            "apiKey": self.config.api_key,
            "language": self.config.language,
            "sortBy": self.config.sort_by,
            "pageSize": self.config.page_size,
        }
        logger.info("Fetching news from NewsAPI with keywords: %s", self.config.query)
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(self.config.url, params=params)
                payload = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("Error fetching from NewsAPI: %s", exc)
                raise UpstreamError(FEED_FAILURE) from exc

        if not isinstance(payload, Mapping) or payload.get("status") != "ok":
            logger.error(
                "NewsAPI returned status %d with non-ok payload: %s",
                response.status_code,
                payload,
            )
            raise UpstreamError(FEED_FAILURE)

        articles = list(payload.get("articles") or [])
        logger.info("Fetched %d articles from NewsAPI.", len(articles))
        return articles
