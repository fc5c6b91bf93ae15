"""Boundary Protocols — storage capabilities the ledger consumes.

Invariants:
    - Services depend on these Protocols, never on a concrete engine or global handle
    - Every storage call inside one operation receives the same explicit scope
    - run_in_transaction commits on success and rolls back on ANY exception

Design Decisions:
    - Protocol over ABC: structural subtyping; DatabaseSessionManager and test
      doubles satisfy it without inheritance
    - The scope is a SQLAlchemy AsyncSession: one transaction, passed by reference
"""

from contextlib import AbstractAsyncContextManager
from typing import Awaitable, Callable, Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class LedgerStore(Protocol):
    """Query execution and scoped transactions over the ledger database."""

    def session(self) -> AbstractAsyncContextManager[AsyncSession]: ...

    async def run_in_transaction(
        self, fn: Callable[[AsyncSession], Awaitable[T]],
    ) -> T: ...
