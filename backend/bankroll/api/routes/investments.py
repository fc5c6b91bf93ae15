"""Investment Routes — HTTP surface over the InvestmentLedger.

Invariants:
    - Bodies validated by the request schemas before the ledger is called
    - Absence (no position) maps to 404 here; the ledger itself returns None
    - InvestmentExistsError surfaces as 409 via the global handler

Design Decisions:
    - Ledger obtained through a dependency so tests can bind it to a test engine
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from bankroll.core.errors import ResourceNotFoundError
from bankroll.infrastructure.database import DatabaseSessionManager, get_db_manager
from bankroll.schemas.investment import (
    CreateInvestmentRequest, HasInvestmentResponse, IncrementAmountRequest,
    InvestmentCreatedResponse, InvestmentResponse, UpdateRiskProfileRequest,
    UserBalanceResponse,
)
from bankroll.services.investment_ledger import InvestmentLedger

router = APIRouter(
    prefix="/api/v1/users/{user_id}/investment", tags=["investments"],
)


def get_ledger(
    store: DatabaseSessionManager = Depends(get_db_manager),
) -> InvestmentLedger:
    return InvestmentLedger(store)


def _no_investment(user_id: UUID) -> HTTPException:
    return HTTPException(
        status.HTTP_404_NOT_FOUND,
        detail=ResourceNotFoundError(
            "Investment for user", str(user_id),
        ).to_response(),
    )


@router.get("/exists", response_model=HasInvestmentResponse)
async def has_investment(
    user_id: UUID, ledger: InvestmentLedger = Depends(get_ledger),
):
    return HasInvestmentResponse(
        has_investment=await ledger.has_investment(user_id),
    )


@router.post(
    "", response_model=InvestmentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_investment(
    user_id: UUID,
    body: CreateInvestmentRequest,
    ledger: InvestmentLedger = Depends(get_ledger),
):
    """Open a position; debits the user's balance by amount."""
    created = await ledger.create_investment(user_id, body)
    return InvestmentCreatedResponse(
        user=UserBalanceResponse.model_validate(created.user),
        investment=InvestmentResponse.model_validate(created.investment),
    )


@router.post("/increments", response_model=InvestmentResponse)
async def increment_amount(
    user_id: UUID,
    body: IncrementAmountRequest,
    ledger: InvestmentLedger = Depends(get_ledger),
):
    investment = await ledger.increment_amount(user_id, body.inc_amount)
    if investment is None:
        raise _no_investment(user_id)
    return InvestmentResponse.model_validate(investment)


@router.put("/risk-profile", response_model=InvestmentResponse)
async def update_risk_profile(
    user_id: UUID,
    body: UpdateRiskProfileRequest,
    ledger: InvestmentLedger = Depends(get_ledger),
):
    investment = await ledger.update_risk_profile(user_id, body)
    if investment is None:
        raise _no_investment(user_id)
    return InvestmentResponse.model_validate(investment)


@router.post("/divestment", response_model=UserBalanceResponse)
async def divest_all(
    user_id: UUID, ledger: InvestmentLedger = Depends(get_ledger),
):
    """Close the position and credit net proceeds to the balance."""
    user = await ledger.divest_all(user_id)
    if user is None:
        raise _no_investment(user_id)
    return UserBalanceResponse.model_validate(user)
