"""Ledger test helpers — seed rows directly and read state through fresh sessions."""

from sqlalchemy import select

from bankroll.models.investment import Investment
from bankroll.models.user import User


async def add_user(store, username="alice", balance=1000.0) -> User:
    async with store.session() as db:
        user = User(username=username, balance_satoshis=balance)
        db.add(user)
        await db.commit()
        return user


async def add_investment(
    store, user, amount, high_tide=None, risk=1.0, offsite=0.0,
) -> Investment:
    """Insert a position directly, bypassing the ledger (no balance debit)."""
    async with store.session() as db:
        investment = Investment(
            user_id=user.id, amount=amount, risk=risk, offsite=offsite,
            high_tide=amount if high_tide is None else high_tide,
        )
        db.add(investment)
        await db.commit()
        return investment


async def read_balance(store, user_id) -> float:
    async with store.session() as db:
        result = await db.execute(
            select(User.balance_satoshis).where(User.id == user_id),
        )
        return result.scalar_one()


async def read_investment(store, user_id) -> Investment | None:
    async with store.session() as db:
        result = await db.execute(
            select(Investment).where(Investment.user_id == user_id),
        )
        return result.scalar_one_or_none()
