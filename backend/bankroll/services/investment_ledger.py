"""Investment Ledger — create / increment / update / divest lifecycle for one position per user.

Invariants:
    - Inputs validated before any IO; malformed input raises InvestmentValidationError
    - create_investment: position insert + balance debit commit together or not at all
    - divest_all: delete + settlement + balance credit commit together or not at all
    - increment_amount moves amount and high_tide by the same delta, never the balance
    - Missing position -> None (not an error) for increment, update and divest

Design Decisions:
    - Store injected (LedgerStore Protocol): no ambient/global transaction handle
    - Existence pre-check gives a clean conflict on the common path; the unique
      constraint in investment_store closes the concurrent-create race
    - increment_amount does not debit the balance: the caller owns that side
      of a top-up
"""

import logging
from dataclasses import dataclass
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from bankroll.core.domain_types import LedgerOperation
from bankroll.core.errors import (
    ErrorContext, InvestmentExistsError, InvestmentValidationError,
    ResourceNotFoundError,
)
from bankroll.core.repository_protocols import LedgerStore
from bankroll.core.settlement import settle_divestment
from bankroll.models.investment import Investment
from bankroll.models.user import User
from bankroll.schemas.investment import (
    CreateInvestmentRequest, IncrementAmountRequest, UpdateRiskProfileRequest,
)
from bankroll.services import investment_store

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass
class InvestmentCreated:
    """Result of create_investment: the debited user and the new position."""
    user: User
    investment: Investment


def coerce_request(
    model: type[M], opts: M | dict[str, Any], user_id: UUID, operation: LedgerOperation,
) -> M:
    """Validate caller options into the operation's request model."""
    if isinstance(opts, model):
        return opts
    try:
        return model.model_validate(opts)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or "request"
        raise InvestmentValidationError(
            f"Invalid {field}: {first['msg']}", field,
            ErrorContext(user_id=str(user_id), operation=operation.value),
        ) from e


class InvestmentLedger:
    """Lifecycle controller for per-user investment positions."""

    def __init__(self, store: LedgerStore):
        self.store = store

    async def has_investment(self, user_id: UUID) -> bool:
        async with self.store.session() as db:
            return await investment_store.investment_exists(db, user_id)

    async def create_investment(
        self, user_id: UUID, opts: CreateInvestmentRequest | dict,
    ) -> InvestmentCreated:
        """Open a position and debit the user's balance by its amount.

        Raises InvestmentExistsError if the user already holds a position;
        nothing is written in that case.
        """
        request = coerce_request(
            CreateInvestmentRequest, opts, user_id, LedgerOperation.CREATE,
        )

        async def _create(db: AsyncSession) -> InvestmentCreated:
            if await investment_store.investment_exists(db, user_id):
                raise InvestmentExistsError(str(user_id))
            investment = await investment_store.insert_investment(
                db, user_id, request.amount, request.risk, request.offsite,
            )
            user = await investment_store.adjust_balance(
                db, user_id, -request.amount,
            )
            if user is None:
                raise ResourceNotFoundError("User", str(user_id))
            return InvestmentCreated(user=user, investment=investment)

        try:
            created = await self.store.run_in_transaction(_create)
        except InvestmentExistsError:
            logger.warning(
                "Investment already exists",
                extra={
                    "user_id": str(user_id),
                    "operation": LedgerOperation.CREATE.value,
                    "error_code": "INVESTMENT_EXISTS",
                },
            )
            raise
        logger.info(
            "Investment created",
            extra={
                "user_id": str(user_id),
                "operation": LedgerOperation.CREATE.value,
                "amount": request.amount,
            },
        )
        return created

    async def increment_amount(
        self, user_id: UUID, inc_amount: float,
    ) -> Investment | None:
        """Add inc_amount to amount and high_tide. None if user has no position."""
        request = coerce_request(
            IncrementAmountRequest, {"inc_amount": inc_amount},
            user_id, LedgerOperation.INCREMENT,
        )

        async def _increment(db: AsyncSession) -> Investment | None:
            return await investment_store.increment_investment(
                db, user_id, request.inc_amount,
            )

        investment = await self.store.run_in_transaction(_increment)
        if investment is not None:
            logger.info(
                "Investment incremented",
                extra={
                    "user_id": str(user_id),
                    "operation": LedgerOperation.INCREMENT.value,
                    "amount": request.inc_amount,
                },
            )
        return investment

    async def update_risk_profile(
        self, user_id: UUID, opts: UpdateRiskProfileRequest | dict,
    ) -> Investment | None:
        """Overwrite offsite and risk. None if user has no position."""
        request = coerce_request(
            UpdateRiskProfileRequest, opts, user_id,
            LedgerOperation.UPDATE_RISK_PROFILE,
        )

        async def _update(db: AsyncSession) -> Investment | None:
            return await investment_store.update_risk_profile(
                db, user_id, request.offsite, request.risk,
            )

        investment = await self.store.run_in_transaction(_update)
        if investment is not None:
            logger.info(
                "Risk profile updated",
                extra={
                    "user_id": str(user_id),
                    "operation": LedgerOperation.UPDATE_RISK_PROFILE.value,
                },
            )
        return investment

    async def divest_all(self, user_id: UUID) -> User | None:
        """Close the position and credit net proceeds. None if user has no position.

        Commission is charged only on amount above high_tide.
        """

        async def _divest(db: AsyncSession) -> User | None:
            investment = await investment_store.delete_investment(db, user_id)
            if investment is None:
                return None
            settlement = settle_divestment(
                investment.amount, investment.high_tide,
            )
            user = await investment_store.adjust_balance(
                db, user_id, settlement.user_net,
            )
            if user is None:
                raise ResourceNotFoundError("User", str(user_id))
            logger.info(
                "Investment divested",
                extra={
                    "user_id": str(user_id),
                    "operation": LedgerOperation.DIVEST.value,
                    "amount": investment.amount,
                    "user_net": settlement.user_net,
                    "house_commission": settlement.house_commission,
                },
            )
            return user

        return await self.store.run_in_transaction(_divest)
