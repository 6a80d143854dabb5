# src/mindwell/models/letter.py
"""SQLAlchemy models for anonymous letters and their replies."""

from __future__ import annotations

import secrets
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mindwell.db.session import Base
from mindwell.db.time import utcnow

DEFAULT_TITLE = "Untitled"
DEFAULT_MOOD = "Neutral"


def new_letter_id() -> str:
    """Return a 20 character alphanumeric document identifier."""
    return secrets.token_hex(10)


class Letter(Base):
    """A community post on the anonymous letters board.

    Content and author are immutable after creation; only ``likes`` and the
    reply sequence change over a letter's lifetime.
    """

    __tablename__ = "letter"

    # Internal row key; breaks ordering ties between letters written in the same instant.
    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, index=True, default=new_letter_id)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_TITLE)
    mood: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_MOOD)
    # Display handle; deletion is gated on an exact match with this value.
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    replies: Mapped[list[LetterReply]] = relationship(
        back_populates="letter",
        order_by="LetterReply.pk",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class LetterReply(Base):
    """Append-only reply attached to a letter; has no public identifier."""

    __tablename__ = "letter_reply"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    letter_pk: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("letter.pk", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    letter: Mapped[Letter] = relationship(back_populates="replies")
