"""Risk Aggregator — system-wide maximum-loss exposure across open positions.

Invariants:
    - Read-only: never writes, never locks
    - Always returns a number (0.0 when no positions exist)
    - Each position contributes min((amount + offsite) * risk, amount)

Design Decisions:
    - Computed in SQL so the figure comes from one consistent snapshot
    - Meant to be called once at the start of each game round
"""

import logging

from bankroll.core.domain_types import LedgerOperation
from bankroll.core.repository_protocols import LedgerStore
from bankroll.services.investment_store import sum_max_loss

logger = logging.getLogger(__name__)


class RiskAggregator:

    def __init__(self, store: LedgerStore):
        self.store = store

    async def calculate_max_loss(self) -> float:
        async with self.store.session() as db:
            max_loss = await sum_max_loss(db)
        logger.info(
            "Max loss calculated",
            extra={
                "operation": LedgerOperation.MAX_LOSS.value,
                "max_loss": max_loss,
            },
        )
        return max_loss
