"""create owner, invoices and counters tables

Revision ID: 7c1e4d2a9b30
Revises:
Create Date: 2025-08-20 10:12:44.103215

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e4d2a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "owner",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("slot", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("access_code_hash", sa.Text(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("timezone('utc', now())"),
                  nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("timezone('utc', now())"),
                  nullable=False),
        sa.UniqueConstraint("slot", name="uq_owner_singleton"),
        sa.CheckConstraint("slot = 1", name="chk_owner_singleton"),
    )

    op.create_table(
        "counters",
        sa.Column("key", sa.Text(), primary_key=True, nullable=False),
        sa.Column("value", sa.BigInteger(), nullable=False),
        sa.CheckConstraint("value >= 0", name="chk_counter_nonneg"),
    )

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), sa.Identity(always=True), primary_key=True, nullable=False),
        sa.Column("invoice_number", sa.BigInteger(), nullable=False),
        sa.Column("company_name", sa.Text(), nullable=False),
        sa.Column("company_phone", sa.Text(), nullable=True),
        sa.Column("company_address", sa.Text(), nullable=False),
        sa.Column("company_gst", sa.Text(), nullable=False),
        sa.Column("rate_per_ton", sa.Numeric(12, 2), nullable=False),
        sa.Column("trucks", sa.Integer(), nullable=False),
        sa.Column("total", sa.Numeric(16, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("owner.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("timezone('utc', now())"),
                  nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("timezone('utc', now())"),
                  nullable=False),
        sa.CheckConstraint("rate_per_ton >= 0", name="chk_rate_per_ton_nonneg"),
        sa.CheckConstraint("trucks >= 0", name="chk_trucks_nonneg"),
        sa.CheckConstraint("total = rate_per_ton * trucks", name="chk_total_is_rate_times_trucks"),
    )
    op.create_index("ix_invoices_invoice_number", "invoices", ["invoice_number"], unique=True)
    op.create_index("ix_invoices_owner_created_at", "invoices", ["owner_id", "created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_invoices_owner_created_at", table_name="invoices")
    op.drop_index("ix_invoices_invoice_number", table_name="invoices")
    op.drop_table("invoices")
    op.drop_table("counters")
    op.drop_table("owner")
