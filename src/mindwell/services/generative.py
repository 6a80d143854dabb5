"""Client for the external generative text service.

Wraps the Gemini ``generateContent`` REST endpoint behind a small async API
used by both the content moderator and the wellness assistant. The client is
configured from an immutable config object so tests can build one against a
mock transport, and reports an explicit disabled state when no API key is set.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from mindwell.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)

HTTP_OK = 200

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"


class GenerativeError(RuntimeError):
    """Base exception raised for generative service failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GenerativeDisabledError(GenerativeError):
    """Raised when the service is called without a configured API key."""


class GenerativeTimeoutError(GenerativeError):
    """Raised when the service does not answer within the configured timeout."""


@dataclass(frozen=True)
class GenerativeConfig:
    """Immutable configuration for the generative text service."""

    api_key: str | None
    model: str
    base_url: str
    timeout_seconds: float

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class GenerationResult:
    """Text produced for a prompt plus the service's safety signals."""

    text: str
    block_reason: str | None = None
    finish_reason: str | None = None
    safety_ratings: Sequence[Mapping[str, Any]] = field(default_factory=tuple)

    @property
    def blocked(self) -> bool:
        return bool(self.block_reason) or self.finish_reason == "SAFETY"


class TextGenerator(Protocol):
    """Anything that can turn a prompt into a ``GenerationResult``."""

    @property
    def enabled(self) -> bool: ...

    async def generate(self, prompt: str) -> GenerationResult: ...


def load_generative_config() -> GenerativeConfig:
    """Build configuration object from global settings."""

    return GenerativeConfig(
        api_key=settings.google_api_key,
        model=settings.generative_model,
        base_url=settings.generative_base_url,
        timeout_seconds=float(settings.generative_timeout_seconds),
    )


def parse_generation(payload: Mapping[str, Any]) -> GenerationResult:
    """Convert a ``generateContent`` response body into a ``GenerationResult``.

    Raises:
        GenerativeError: If the body does not have the documented shape.
    """
    feedback = payload.get("promptFeedback") or {}
    candidates = payload.get("candidates") or []
    if not isinstance(feedback, Mapping) or not isinstance(candidates, Sequence):
        raise GenerativeError("Generative service returned a malformed payload")
    candidate = candidates[0] if candidates else {}
    if not isinstance(candidate, Mapping):
        raise GenerativeError("Generative service returned a malformed candidate")
    content = candidate.get("content")
    if content is None:
        content = {}
    if not isinstance(content, Mapping):
        raise GenerativeError("Generative service returned a malformed candidate")
    parts = content.get("parts") or []
    if not isinstance(parts, Sequence):
        raise GenerativeError("Generative service returned malformed content parts")
    text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, Mapping))
    ratings = candidate.get("safetyRatings") or ()
    return GenerationResult(
        text=text,
        block_reason=feedback.get("blockReason"),
        finish_reason=candidate.get("finishReason"),
        safety_ratings=tuple(ratings) if isinstance(ratings, Sequence) else (),
    )


class GenerativeClient:
    """HTTP client wrapper for the generative text service."""

    def __init__(
        self,
        config: GenerativeConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_generative_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.enabled:
            raise GenerativeDisabledError("Generative text service is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "safetySettings": [
                {"category": category, "threshold": SAFETY_THRESHOLD}
                for category in SAFETY_CATEGORIES
            ],
        }

    async def generate(self, prompt: str) -> GenerationResult:
        """Generate text for ``prompt``.

        Raises:
            GenerativeDisabledError: If no API key is configured.
            GenerativeTimeoutError: If the request times out.
            GenerativeError: On transport failures, error statuses or unreadable bodies.
        """
        client = await self._ensure_client()
        path = f"/v1beta/models/{self.config.model}:generateContent"
        try:
            response = await client.post(
                path,
                json=self._build_payload(prompt),
                headers={"x-goog-api-key": self.config.api_key or ""},
            )
        except httpx.TimeoutException as exc:
            raise GenerativeTimeoutError(f"Generative request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise GenerativeError(f"Generative request failed: {exc}") from exc

        if response.status_code != HTTP_OK:
            raise GenerativeError(
                f"Generative service responded with {response.status_code}: "
                f"{_error_message(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise GenerativeError(
                "Generative service returned a non-JSON body",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, Mapping):
            raise GenerativeError("Generative service returned an unexpected payload")

        return parse_generation(payload)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""

        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, Mapping):
        error = body.get("error")
        if isinstance(error, Mapping) and error.get("message"):
            return str(error["message"])
    return response.text[:200]


class _GenerativeClientSingleton:
    """Singleton wrapper for GenerativeClient."""

    _instance: GenerativeClient | None = None

    @classmethod
    def get_instance(cls) -> GenerativeClient:
        """Get or create the singleton GenerativeClient instance."""
        if cls._instance is None:
            cls._instance = GenerativeClient()
            if not cls._instance.enabled:
                logger.error(
                    "GOOGLE_API_KEY is not set; AI chat is disabled and moderation will fail closed."
                )
        return cls._instance


def get_generative_client() -> GenerativeClient:
    """Return a singleton generative client instance."""
    return _GenerativeClientSingleton.get_instance()
