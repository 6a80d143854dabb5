# src/mindwell/models/user.py
"""Account profile data kept alongside the identity provider record."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from mindwell.db.session import Base
from mindwell.db.time import utcnow


class UserProfile(Base):
    """Display preferences for a user identified by the identity provider uid."""

    __tablename__ = "user_profile"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(50), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
