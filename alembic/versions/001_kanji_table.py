"""Kanji table — character (unique), readings, meaning, timestamps.

Revision ID: 001_kanji
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_kanji"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "kanji",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("character", sa.String(16), nullable=False),
        sa.Column("onyomi", sa.Text, nullable=False, server_default=""),
        sa.Column("kunyomi", sa.Text, nullable=False, server_default=""),
        sa.Column("meaning", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("character", name="uq_kanji_character"),
    )


def downgrade() -> None:
    op.drop_table("kanji")
