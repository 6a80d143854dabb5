"""Generative wellness assistant used by the AI chat endpoint."""

from __future__ import annotations

import logging

from mindwell.core.errors import AssistantBlocked, UpstreamError, UpstreamUnavailable
from mindwell.services.generative import GenerativeDisabledError, GenerativeError, TextGenerator

logger = logging.getLogger(__name__)

INSTRUCTION_PROMPT = """You are "MindWell Assistant", a supportive, knowledgeable, and empathetic \
AI companion for the MindWell mental wellness platform. Your goal is to engage users in helpful \
conversations about mental well-being, offering encouragement, general information (like stress, \
anxiety, mindfulness), coping strategies (like breathing exercises, grounding), and resources \
within MindWell (mood tracking, journaling, etc.). Maintain a warm, positive, non-judgmental tone. \
Keep responses relatively concise and easy to understand.
**IMPORTANT SAFETY RULES:**
- You are NOT a therapist or medical professional. DO NOT give diagnoses or medical advice.
- If a user discusses serious distress, self-harm, suicidal thoughts, or seems in crisis, you MUST \
clearly state your limitations as an AI and strongly recommend seeking immediate professional help \
(e.g. a crisis hotline or emergency services). Do not attempt crisis intervention.
- Decline requests for inappropriate content or topics outside mental wellness.
- Do not ask for personal information.

Now, please respond helpfully and safely to the following user message:"""

GENERIC_FAILURE = "Sorry, I encountered an issue while processing your request. Please try again."


def build_prompt(message: str) -> str:
    """Combine the assistant instructions with the user's message."""
    return f"{INSTRUCTION_PROMPT}\n\nUser: {message}"


class WellnessAssistant:
    """Answers free-form wellness questions through a text generator."""

    def __init__(self, generator: TextGenerator) -> None:
        self.generator = generator

    async def reply(self, message: str) -> str:
        """Return the assistant's answer to ``message``.

        Raises:
            UpstreamUnavailable: If the generative service is not configured.
            AssistantBlocked: If the service withheld its answer for safety reasons.
            UpstreamError: On any other upstream failure or an empty answer.
        """
        if not self.generator.enabled:
            logger.error("AI chat requested but the generative client is not configured")
            raise UpstreamUnavailable("AI service is temporarily unavailable or not configured.")

        logger.info("Processing AI chat message: %r", message[:50])
        try:
            result = await self.generator.generate(build_prompt(message))
        except GenerativeDisabledError as exc:
            raise UpstreamUnavailable(
                "AI service is temporarily unavailable or not configured."
            ) from exc
        except GenerativeError as exc:
            logger.error("AI chat upstream failure: %s", exc)
            raise UpstreamError(GENERIC_FAILURE) from exc

        text = (result.text or "").strip()
        if not text:
            if result.blocked:
                reason = result.block_reason or result.finish_reason or "SAFETY"
                logger.error("Generative service blocked the prompt: %s", reason)
                raise AssistantBlocked(reason)
            logger.error("Generative service returned an empty response")
            raise UpstreamError(GENERIC_FAILURE)

        logger.info("Sending AI chat response: %r", text[:70])
        return text
