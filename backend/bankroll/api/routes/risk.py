"""Risk Routes — max-loss exposure figure for round bookkeeping."""

from fastapi import APIRouter, Depends

from bankroll.infrastructure.database import DatabaseSessionManager, get_db_manager
from bankroll.schemas.investment import MaxLossResponse
from bankroll.services.risk_aggregator import RiskAggregator

router = APIRouter(prefix="/api/v1/risk", tags=["risk"])


@router.get("/max-loss", response_model=MaxLossResponse)
async def calculate_max_loss(
    store: DatabaseSessionManager = Depends(get_db_manager),
):
    return MaxLossResponse(
        max_loss=await RiskAggregator(store).calculate_max_loss(),
    )
