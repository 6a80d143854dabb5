"""AI content moderation for community submissions.

The moderator asks the generative text service for a one-word verdict and
fails closed: whenever a clear ``OK`` is not obtained, the text is flagged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from mindwell.core.settings import settings
from mindwell.services.generative import (
    GenerativeDisabledError,
    GenerativeError,
    GenerativeTimeoutError,
    TextGenerator,
)

logger = logging.getLogger(__name__)

VERDICT_FLAGGED = "FLAGGED"
VERDICT_OK = "OK"

HTTP_TOO_MANY_REQUESTS = 429
HTTP_INTERNAL_SERVER_ERROR = 500

MODERATION_PROMPT = """You are a content moderator. Analyze the following text based on standard \
community guidelines focusing on toxicity, hate speech, harassment, threats, insults, severe \
negativity, and other harmful content.

Respond ONLY with the single word 'FLAGGED' if the text violates these guidelines or is otherwise \
inappropriate for a supportive community forum.
Respond ONLY with the single word 'OK' if the text is acceptable.

Do not provide explanations or any other text.

Text to analyze:
---
{text}
---"""


@dataclass(frozen=True)
class ModerationConfig:
    """Immutable moderation settings."""

    timeout_seconds: float


@dataclass
class ModerationVerdict:
    """Outcome of a moderation check; never persisted."""

    flagged: bool
    error: bool = False
    error_message: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)

    def reason(self) -> str:
        """Summarise why the text was flagged, for operator logs."""
        parts = [self.error_message or "Flagged by model"]
        if "raw_response" in self.detail:
            parts.append(f"(Response: {self.detail['raw_response']})")
        if "warning" in self.detail:
            parts.append(f"- {self.detail['warning']}")
        if "safety_block" in self.detail:
            parts.append(f"- Safety Block: {self.detail['safety_block']}")
        return " ".join(parts)


def load_moderation_config() -> ModerationConfig:
    """Build configuration object from global settings."""
    return ModerationConfig(timeout_seconds=float(settings.moderation_timeout_seconds))


def describe_failure(exc: BaseException) -> str:
    """Map a generative service failure to an operator-facing message."""
    if isinstance(exc, GenerativeDisabledError):
        return "Moderation service unavailable."
    if isinstance(exc, (GenerativeTimeoutError, asyncio.TimeoutError)):
        return "Moderation service timed out."
    message = str(exc)
    status_code = getattr(exc, "status_code", None)
    if "API key not valid" in message:
        return "Moderation service configuration error (Invalid Google API Key?)."
    if status_code == HTTP_TOO_MANY_REQUESTS or "quota" in message.lower():
        return "Moderation service temporarily unavailable (Quota/Rate Limit)."
    if "billing" in message.lower():
        return "Moderation service unavailable (Billing issue?)."
    if status_code is not None and status_code >= HTTP_INTERNAL_SERVER_ERROR:
        return "Moderation service temporarily unavailable (Server Error)."
    return f"Moderation check failed: {message or 'Unknown error'}"


class ContentModerator:
    """Binary FLAGGED/OK classifier backed by a text generator."""

    def __init__(self, generator: TextGenerator, config: ModerationConfig | None = None) -> None:
        self.generator = generator
        self.config = config or load_moderation_config()

    async def moderate(self, text: str | None) -> ModerationVerdict:
        """Return the moderation verdict for ``text``.

        Empty text is never flagged. An unconfigured service, a raised error, a
        timeout, a safety refusal, or any answer other than exactly ``OK`` or
        ``FLAGGED`` (ignoring case and surrounding whitespace) yields ``flagged=True``.
        """
        if not text or not isinstance(text, str) or not text.strip():
            logger.debug("Received empty text, skipping moderation")
            return ModerationVerdict(flagged=False)

        if not self.generator.enabled:
            logger.error("Generative client not configured; blocking content")
            return ModerationVerdict(
                flagged=True,
                error=True,
                error_message=describe_failure(GenerativeDisabledError("not configured")),
            )

        logger.info("Analyzing text starting with: %r", text[:70])
        try:
            result = await asyncio.wait_for(
                self.generator.generate(MODERATION_PROMPT.format(text=text)),
                timeout=self.config.timeout_seconds,
            )
        except (GenerativeError, asyncio.TimeoutError) as exc:
            logger.error("Moderation call failed: %s", exc)
            return ModerationVerdict(
                flagged=True,
                error=True,
                error_message=describe_failure(exc),
                detail={"raw_error": repr(exc)},
            )
        except Exception as exc:
            logger.exception("Unexpected moderation failure; blocking content")
            return ModerationVerdict(
                flagged=True,
                error=True,
                error_message=describe_failure(exc),
                detail={"raw_error": repr(exc)},
            )

        verdict_text = (result.text or "").strip().upper()
        detail: dict[str, Any] = {"raw_response": verdict_text}

        if verdict_text == VERDICT_FLAGGED:
            flagged = True
            logger.warning("Content FLAGGED by model response")
        elif verdict_text == VERDICT_OK:
            flagged = False
            logger.info("Content deemed OK by model response")
        else:
            flagged = True
            detail["warning"] = "Unexpected response format from moderation model."
            logger.warning("Unexpected moderation response %r; defaulting to FLAGGED", verdict_text)

        if result.blocked:
            flagged = True
            detail["safety_block"] = result.block_reason or result.finish_reason
            detail["safety_ratings"] = list(result.safety_ratings)
            logger.warning(
                "Moderation prompt was blocked by safety filters: %s",
                detail["safety_block"],
            )

        return ModerationVerdict(flagged=flagged, detail=detail)
