"""Investment ORM — a user's single open position.

Invariants:
    - user_id is UNIQUE: at most one position per user, enforced by the database
    - high_tide starts at amount and moves in lockstep with every increment
    - amount > 0, risk > 0 and offsite >= 0 (CHECK constraints); an increment
      that would empty the position fails and rolls back
    - Row exists iff the user has capital committed

Design Decisions:
    - Uniqueness at the storage layer, not only an application pre-check, so two
      concurrent creates for one user cannot both succeed
    - ON DELETE CASCADE from users: removing an account closes its position
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Float, DateTime, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from bankroll.db.base import Base

UNIQUE_USER_CONSTRAINT = "uq_investments_user_id"


class Investment(Base):
    """Open position — amount, risk factor, offsite capital, high-tide mark."""
    __tablename__ = "investments"
    __table_args__ = (
        UniqueConstraint("user_id", name=UNIQUE_USER_CONSTRAINT),
        CheckConstraint("amount > 0", name="ck_investments_amount_positive"),
        CheckConstraint("risk > 0", name="ck_investments_risk_positive"),
        CheckConstraint("offsite >= 0", name="ck_investments_offsite_nonnegative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    risk: Mapped[float] = mapped_column(Float, nullable=False)
    offsite: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    high_tide: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="investment")
