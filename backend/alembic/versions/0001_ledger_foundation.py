"""ledger foundation

Revision ID: 0001_ledger
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_ledger"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("starting_bankroll", sa.Float(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )

    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("ticket_type", sa.String(length=16), nullable=False),
        sa.Column("stake", sa.Float(), nullable=False),
        sa.Column("league", sa.String(length=32), nullable=True),
        sa.Column("book", sa.String(length=64), nullable=True),
        sa.Column("placed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="open"),
        sa.Column("payout", sa.Float(), nullable=True),
        sa.Column("profit", sa.Float(), nullable=True),
        sa.Column("settled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("stake > 0", name="ck_tickets_stake_positive"),
        sa.CheckConstraint("ticket_type in ('single', 'parlay')", name="ck_tickets_ticket_type"),
    )
    op.create_index("ix_tickets_user_id", "tickets", ["user_id"])
    op.create_index("ix_tickets_league", "tickets", ["league"])
    op.create_index("ix_tickets_placed_at", "tickets", ["placed_at"])
    op.create_index("ix_tickets_status", "tickets", ["status"])

    op.create_table(
        "legs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("ticket_id", sa.Integer(), sa.ForeignKey("tickets.id"), nullable=False),
        sa.Column("selection", sa.String(length=255), nullable=False),
        sa.Column("american_odds", sa.Float(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="open"),
        sa.CheckConstraint("american_odds <> 0", name="ck_legs_odds_nonzero"),
    )
    op.create_index("ix_legs_ticket_id", "legs", ["ticket_id"])


def downgrade() -> None:
    op.drop_index("ix_legs_ticket_id", table_name="legs")
    op.drop_table("legs")
    for name in ("ix_tickets_status", "ix_tickets_placed_at", "ix_tickets_league", "ix_tickets_user_id"):
        op.drop_index(name, table_name="tickets")
    op.drop_table("tickets")
    op.drop_table("profiles")
