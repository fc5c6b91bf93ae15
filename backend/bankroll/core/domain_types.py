"""Domain Types — enums that replace bare strings across the codebase.

Invariants:
    - All valid ledger operations encoded as an Enum — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON log fields without custom encoders
"""

from enum import Enum


class LedgerOperation(str, Enum):
    """Ledger operations — used as the `operation` log/error field."""
    HAS_INVESTMENT = "has_investment"
    CREATE = "create_investment"
    INCREMENT = "increment_amount"
    UPDATE_RISK_PROFILE = "update_risk_profile"
    DIVEST = "divest_all"
    MAX_LOSS = "calculate_max_loss"
