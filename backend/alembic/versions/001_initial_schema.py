"""Initial schema — users and investments.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False, unique=True),
        sa.Column("balance_satoshis", sa.Float, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "investments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("risk", sa.Float, nullable=False),
        sa.Column("offsite", sa.Float, nullable=False, server_default="0"),
        sa.Column("high_tide", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", name="uq_investments_user_id"),
        sa.CheckConstraint("amount > 0", name="ck_investments_amount_positive"),
        sa.CheckConstraint("risk > 0", name="ck_investments_risk_positive"),
        sa.CheckConstraint("offsite >= 0", name="ck_investments_offsite_nonnegative"),
    )


def downgrade() -> None:
    op.drop_table("investments")
    op.drop_table("users")
