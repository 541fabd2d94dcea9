"""Invoices and settings tables for the dashboard ledger."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20260101_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("date", sa.String(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sqlite_autoincrement=True,
        if_not_exists=True,
    )
    op.create_index("invoices_date_idx", "invoices", ["date"], if_not_exists=True)

    op.create_table(
        "settings",
        sa.Column("key", sa.String(), primary_key=True),
        sa.Column("value", sa.String(), nullable=False),
        if_not_exists=True,
    )


def downgrade() -> None:
    op.drop_index("invoices_date_idx", table_name="invoices", if_exists=True)
    op.drop_table("settings")
    op.drop_table("invoices")
