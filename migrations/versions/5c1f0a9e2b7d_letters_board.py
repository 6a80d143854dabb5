"""letters board

Revision ID: 5c1f0a9e2b7d
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1f0a9e2b7d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create letters, replies and profile tables."""
    op.create_table(
        "letter",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("mood", sa.String(length=50), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("pk"),
    )
    op.create_index(op.f("ix_letter_id"), "letter", ["id"], unique=True)
    op.create_index(op.f("ix_letter_timestamp"), "letter", ["timestamp"], unique=False)

    op.create_table(
        "letter_reply",
        sa.Column("pk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("letter_pk", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["letter_pk"], ["letter.pk"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("pk"),
    )
    op.create_index(
        op.f("ix_letter_reply_letter_pk"), "letter_reply", ["letter_pk"], unique=False
    )

    op.create_table(
        "user_profile",
        sa.Column("uid", sa.String(length=128), nullable=False),
        sa.Column("display_name", sa.String(length=50), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("uid"),
    )


def downgrade() -> None:
    """Drop letters, replies and profile tables."""
    op.drop_table("user_profile")
    op.drop_index(op.f("ix_letter_reply_letter_pk"), table_name="letter_reply")
    op.drop_table("letter_reply")
    op.drop_index(op.f("ix_letter_timestamp"), table_name="letter")
    op.drop_index(op.f("ix_letter_id"), table_name="letter")
    op.drop_table("letter")
