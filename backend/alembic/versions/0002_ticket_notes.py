"""ticket and leg notes

Revision ID: 0002_notes
Revises: 0001_ledger
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "0002_notes"
down_revision = "0001_ledger"
branch_labels = None
depends_on = None


def _has_column(bind, table: str, col: str) -> bool:
    inspector = sa.inspect(bind)
    return col in {c["name"] for c in inspector.get_columns(table)}


def upgrade() -> None:
    bind = op.get_bind()
    for table in ("tickets", "legs"):
        if not _has_column(bind, table, "notes"):
            op.add_column(table, sa.Column("notes", sa.Text(), nullable=True))


def downgrade() -> None:
    op.drop_column("legs", "notes")
    op.drop_column("tickets", "notes")
