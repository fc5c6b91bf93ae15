"""Settlement Rules — pure profit, commission and exposure arithmetic.

Invariants:
    - user_profit = max(0, amount - high_tide): losses and flat principal are never taxed
    - house_commission = user_profit * HOUSE_COMMISSION_RATE
    - user_net = amount - house_commission (credited back to the free balance)
    - Per-position exposure is (amount + offsite) * risk, capped at amount

Design Decisions:
    - high_tide rises with every top-up, so only gains credited to amount
      outside the increment path are ever commissioned
"""

from dataclasses import dataclass

HOUSE_COMMISSION_RATE = 0.1


@dataclass(frozen=True)
class DivestmentSettlement:
    """Figures produced when a position is closed."""
    user_profit: float
    house_commission: float
    user_net: float


def settle_divestment(amount: float, high_tide: float) -> DivestmentSettlement:
    """Compute profit, commission and net proceeds for a full divestment."""
    user_profit = max(0.0, amount - high_tide)
    house_commission = user_profit * HOUSE_COMMISSION_RATE
    return DivestmentSettlement(
        user_profit=user_profit,
        house_commission=house_commission,
        user_net=amount - house_commission,
    )


def capped_contribution(amount: float, offsite: float, risk: float) -> float:
    """Worst-case house liability for one position.

    Exposure counts offsite capital too, but a position can never cost
    the house more than its own stake.
    """
    return min((amount + offsite) * risk, amount)
