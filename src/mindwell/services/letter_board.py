"""Request-level flows for the anonymous letters board."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from mindwell.core.errors import ModerationBlocked, ValidationError
from mindwell.core.settings import settings
from mindwell.models.letter import Letter, LetterReply
from mindwell.repositories.letter_repo import LetterRepository, SortMode
from mindwell.services.moderation import ContentModerator

logger = logging.getLogger(__name__)

LETTER_BLOCKED_MESSAGE = (
    "Your submission could not be posted because it may violate community guidelines. "
    "Please review and edit your content to ensure it is respectful and supportive."
)
REPLY_BLOCKED_MESSAGE = (
    "Your reply could not be posted because it may violate community guidelines. "
    "Please review and edit your content to ensure it is respectful and supportive."
)


@dataclass(frozen=True)
class BoardConfig:
    """Immutable board policy settings."""

    page_size: int
    max_page_size: int
    atomic_likes: bool
    moderate_replies: bool


def load_board_config() -> BoardConfig:
    """Build configuration object from global settings."""
    return BoardConfig(
        page_size=settings.letters_page_size,
        max_page_size=settings.letters_max_page_size,
        atomic_likes=settings.atomic_like_increment,
        moderate_replies=settings.moderate_replies,
    )


def _require(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


class LetterBoard:
    """Validates board requests, runs moderation and drives the letter store."""

    def __init__(
        self,
        repo: LetterRepository,
        moderator: ContentModerator,
        config: BoardConfig | None = None,
    ) -> None:
        self.repo = repo
        self.moderator = moderator
        self.config = config or load_board_config()

    async def submit(
        self,
        *,
        content: str | None,
        username: str | None,
        title: str | None = None,
        mood: str | None = None,
    ) -> Letter:
        """Moderate and store a new letter.

        Raises:
            ValidationError: If content or username is missing.
            ModerationBlocked: If moderation flags the content; nothing is stored.
        """
        content = _require(content, "Letter content is required.")
        username = _require(username, "Username is required.")

        verdict = await self.moderator.moderate(content)
        if verdict.flagged:
            logger.warning("BLOCKED new letter from %s. Reason: %s", username, verdict.reason())
            raise ModerationBlocked(LETTER_BLOCKED_MESSAGE)
        logger.info("Content PASSED moderation for new letter by %s", username)

        letter = self.repo.create(content=content, username=username, title=title, mood=mood)
        logger.info("Letter submitted successfully with ID: %s", letter.id)
        return letter

    def fetch(
        self,
        *,
        sort: SortMode | str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Letter]:
        """Return one page of letters using the board's paging defaults."""
        page_size = limit if limit and limit > 0 else self.config.page_size
        page_size = min(page_size, self.config.max_page_size)
        return self.repo.list(sort or SortMode.LATEST, page or 1, page_size)

    def like(self, letter_id: str) -> int:
        """Increment a letter's likes and return the new count."""
        new_likes = self.repo.like(letter_id, atomic=self.config.atomic_likes)
        logger.info("Letter %s liked; likes now %d", letter_id, new_likes)
        return new_likes

    async def reply(
        self,
        letter_id: str,
        *,
        content: str | None,
        username: str | None,
    ) -> LetterReply:
        """Append a reply to a letter, moderating it first when enabled.

        Raises:
            ValidationError: If content or username is missing.
            ModerationBlocked: If moderation flags the reply.
            NotFoundError: If the letter does not exist.
        """
        content = _require(content, "Reply content is required.")
        username = _require(username, "Username is required.")

        if self.config.moderate_replies:
            verdict = await self.moderator.moderate(content)
            if verdict.flagged:
                logger.warning(
                    "BLOCKED reply on letter %s from %s. Reason: %s",
                    letter_id,
                    username,
                    verdict.reason(),
                )
                raise ModerationBlocked(REPLY_BLOCKED_MESSAGE)

        reply = self.repo.reply(letter_id, content=content, username=username)
        logger.info("Reply added to letter %s by %s", letter_id, username)
        return reply

    def delete(self, letter_id: str, *, username: str | None) -> None:
        """Delete a letter on behalf of ``username``.

        Raises:
            ValidationError: If no username is supplied.
            NotFoundError: If the letter does not exist.
            ForbiddenError: If ``username`` is not the letter's author.
        """
        username = _require(username, "Username is required to delete a letter.")
        self.repo.delete(letter_id, username)
        logger.info("Letter %s deleted by author %s", letter_id, username)
