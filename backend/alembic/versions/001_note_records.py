"""Note records - one row per user id.

Revision ID: 001_note_records
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_note_records"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "note_records",
        sa.Column("user_id", sa.String(16), primary_key=True),
        sa.Column("notes", sa.JSON, nullable=False),
        sa.Column("timestamp", sa.String(32), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("note_records")
