"""Investment Store — single-statement reads and writes against investments/users.

Invariants:
    - Every function takes the caller's scope (AsyncSession) explicitly
    - Functions never commit: the caller owns the transaction boundary
    - Absence is returned as None, never raised
    - A duplicate insert surfaces as InvestmentExistsError, not a storage error

Design Decisions:
    - Mutations are single UPDATE/DELETE ... RETURNING statements: the new row
      state is read atomically with the write
    - LEAST() is not portable to SQLite, so the per-row cap is a CASE expression
"""

import logging
from uuid import UUID

from sqlalchemy import case, delete, exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bankroll.core.errors import InvestmentExistsError
from bankroll.models.investment import Investment, UNIQUE_USER_CONSTRAINT
from bankroll.models.user import User

logger = logging.getLogger(__name__)


def _is_duplicate_user(e: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite names the column
    msg = str(e.orig)
    return UNIQUE_USER_CONSTRAINT in msg or "investments.user_id" in msg


async def investment_exists(scope: AsyncSession, user_id: UUID) -> bool:
    result = await scope.execute(
        select(exists().where(Investment.user_id == user_id)),
    )
    return bool(result.scalar())


async def insert_investment(
    scope: AsyncSession,
    user_id: UUID,
    amount: float,
    risk: float,
    offsite: float,
) -> Investment:
    """Insert a new position with high_tide equal to amount."""
    investment = Investment(
        user_id=user_id, amount=amount, risk=risk,
        offsite=offsite, high_tide=amount,
    )
    scope.add(investment)
    try:
        await scope.flush()
    except IntegrityError as e:
        if _is_duplicate_user(e):
            raise InvestmentExistsError(str(user_id)) from e
        raise
    return investment


async def increment_investment(
    scope: AsyncSession, user_id: UUID, inc_amount: float,
) -> Investment | None:
    """Add inc_amount to amount and high_tide in one statement."""
    result = await scope.execute(
        update(Investment)
        .where(Investment.user_id == user_id)
        .values(
            amount=Investment.amount + inc_amount,
            high_tide=Investment.high_tide + inc_amount,
        )
        .returning(Investment)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one_or_none()


async def update_risk_profile(
    scope: AsyncSession, user_id: UUID, offsite: float, risk: float,
) -> Investment | None:
    result = await scope.execute(
        update(Investment)
        .where(Investment.user_id == user_id)
        .values(offsite=offsite, risk=risk)
        .returning(Investment)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one_or_none()


async def delete_investment(
    scope: AsyncSession, user_id: UUID,
) -> Investment | None:
    """Remove the position and return its final snapshot."""
    result = await scope.execute(
        delete(Investment)
        .where(Investment.user_id == user_id)
        .returning(Investment),
    )
    return result.scalar_one_or_none()


async def adjust_balance(
    scope: AsyncSession, user_id: UUID, delta: float,
) -> User | None:
    """Add delta (negative to debit) to one user's free balance."""
    result = await scope.execute(
        update(User)
        .where(User.id == user_id)
        .values(balance_satoshis=User.balance_satoshis + delta)
        .returning(User)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one_or_none()


async def sum_max_loss(scope: AsyncSession) -> float:
    """SUM over positions of min((amount + offsite) * risk, amount); 0 when empty."""
    contribution = (Investment.amount + Investment.offsite) * Investment.risk
    capped = case(
        (contribution < Investment.amount, contribution),
        else_=Investment.amount,
    )
    result = await scope.execute(
        select(func.coalesce(func.sum(capped), 0.0)),
    )
    return float(result.scalar_one())
