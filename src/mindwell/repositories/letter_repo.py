"""Data access helpers for the anonymous letters collection."""
from __future__ import annotations

from enum import Enum

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from mindwell.core.errors import ForbiddenError, NotFoundError, ValidationError
from mindwell.core.settings import settings
from mindwell.models.letter import DEFAULT_MOOD, DEFAULT_TITLE, Letter, LetterReply

__all__ = ["LetterRepository", "SortMode"]


class SortMode(str, Enum):
    """Orderings supported by the letters listing."""

    LATEST = "latest"
    POPULAR = "popular"


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required.")
    return value


class LetterRepository:
    """Thin wrapper around database access for letter documents.

    Every mutating operation commits on its own; there are no multi-document
    transactions. ``like`` is a read-increment-write unless the atomic variant
    is requested, so concurrent likes on one letter may lose an increment.
    """

    def __init__(self, session: Session, *, default_page_size: int | None = None) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session
        self.default_page_size = default_page_size or settings.letters_store_page_size

    def get(self, letter_id: str) -> Letter:
        """Return a letter by identifier.

        Raises:
            NotFoundError: If no letter has this identifier.
        """
        letter = self.session.execute(
            select(Letter).where(Letter.id == letter_id)
        ).scalars().first()
        if letter is None:
            raise NotFoundError("Letter not found")
        return letter

    def create(
        self,
        *,
        content: str,
        username: str,
        title: str | None = None,
        mood: str | None = None,
    ) -> Letter:
        """Insert a new letter with no likes and no replies.

        Raises:
            ValidationError: If ``content`` or ``username`` is empty.
        """
        letter = Letter(
            content=_require_text(content, "Letter content"),
            username=_require_text(username, "Username"),
            title=title or DEFAULT_TITLE,
            mood=mood or DEFAULT_MOOD,
            likes=0,
        )
        self.session.add(letter)
        self._commit()
        self.session.refresh(letter)
        return letter

    def list(
        self,
        sort: SortMode | str = SortMode.LATEST,
        page: int | None = 1,
        page_size: int | None = None,
    ) -> list[Letter]:
        """Return one page of letters.

        ``latest`` orders by creation time, ``popular`` by like count with
        newer letters first among equal counts. Pages are 1-based offsets;
        rows inserted or deleted between calls can shift page boundaries.
        """
        sort = SortMode(sort)
        page = page if page and page > 0 else 1
        limit = page_size if page_size and page_size > 0 else self.default_page_size

        stmt = select(Letter)
        if sort is SortMode.POPULAR:
            stmt = stmt.order_by(Letter.likes.desc(), Letter.timestamp.desc(), Letter.pk.desc())
        else:
            stmt = stmt.order_by(Letter.timestamp.desc(), Letter.pk.desc())
        stmt = stmt.offset((page - 1) * limit).limit(limit)
        return list(self.session.execute(stmt).scalars())

    def like(self, letter_id: str, *, atomic: bool = False) -> int:
        """Increment the like counter and return the new value.

        Raises:
            NotFoundError: If no letter has this identifier.
        """
        if atomic:
            return self._like_atomic(letter_id)

        letter = self.get(letter_id)
        new_likes = (letter.likes or 0) + 1
        letter.likes = new_likes
        self._commit()
        return new_likes

    def _like_atomic(self, letter_id: str) -> int:
        result = self.session.execute(
            update(Letter)
            .where(Letter.id == letter_id)
            .values(likes=Letter.likes + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFoundError("Letter not found")
        self._commit()
        return self.session.execute(
            select(Letter.likes).where(Letter.id == letter_id)
        ).scalar_one()

    def reply(self, letter_id: str, *, content: str, username: str) -> LetterReply:
        """Append a reply to a letter.

        Replies are separate rows, so appending never rewrites earlier replies.

        Raises:
            ValidationError: If ``content`` or ``username`` is empty.
            NotFoundError: If no letter has this identifier.
        """
        content = _require_text(content, "Reply content")
        username = _require_text(username, "Username")
        letter_pk = self.session.execute(
            select(Letter.pk).where(Letter.id == letter_id)
        ).scalar_one_or_none()
        if letter_pk is None:
            raise NotFoundError("Cannot reply: Letter not found")

        reply = LetterReply(letter_pk=letter_pk, content=content, username=username)
        self.session.add(reply)
        self._commit()
        return reply

    def delete(self, letter_id: str, requesting_username: str) -> None:
        """Delete a letter if ``requesting_username`` is its author.

        The comparison is against a caller-supplied handle, not a verified identity.

        Raises:
            NotFoundError: If no letter has this identifier.
            ForbiddenError: If the username does not match the author.
        """
        letter = self.get(letter_id)
        if letter.username != requesting_username:
            raise ForbiddenError("Forbidden: You are not authorized to delete this letter.")
        self.session.delete(letter)
        self._commit()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
