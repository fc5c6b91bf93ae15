"""User ORM — the balance-holding account the ledger debits and credits.

Invariants:
    - balance_satoshis is the user's free (uninvested) balance
    - The ledger only ever reads id and adjusts balance_satoshis

Design Decisions:
    - No lower bound on balance_satoshis here: insufficient-funds protection
      belongs to whoever calls create_investment
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from bankroll.db.base import Base


class User(Base):
    """Account with a free balance."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    balance_satoshis: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    investment: Mapped["Investment"] = relationship(
        "Investment", back_populates="user", uselist=False,
        passive_deletes=True,
    )
