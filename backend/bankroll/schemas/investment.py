"""Investment Schemas — one validated options structure per ledger operation.

Invariants:
    - CreateInvestmentRequest: amount > 0, risk > 0, offsite >= 0 (defaults to 0)
    - UpdateRiskProfileRequest: offsite and risk both required
    - IncrementAmountRequest: any finite number; a negative value may shrink the
      position but the stored amount must stay > 0 (enforced by the investments
      CHECK constraint, surfaced as DatabaseError)
    - Numeric fields reject bools, strings, NaN and infinities

Design Decisions:
    - Explicit field names per operation: a misspelled option fails validation
      instead of silently reaching the database as undefined
    - Responses built from ORM rows via from_attributes
"""

from decimal import Decimal
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationInfo,
    computed_field, field_validator,
)

from bankroll.core.settlement import capped_contribution


def _require_number(v, info: ValidationInfo):
    if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
        raise ValueError(f"{info.field_name} must be a number")
    return v


class CreateInvestmentRequest(BaseModel):
    """Opening a position — user gives amount, risk and optional offsite."""
    model_config = ConfigDict(extra="forbid")

    amount: float = Field(gt=0, allow_inf_nan=False)
    risk: float = Field(gt=0, allow_inf_nan=False)
    offsite: float = Field(0.0, ge=0, allow_inf_nan=False)

    @field_validator("amount", "risk", "offsite", mode="before")
    @classmethod
    def require_number(cls, v, info: ValidationInfo):
        # null offsite counts as no offsite capital
        if v is None and info.field_name == "offsite":
            return 0.0
        return _require_number(v, info)


class IncrementAmountRequest(BaseModel):
    """Top-up of an existing position's amount and high tide."""
    model_config = ConfigDict(extra="forbid")

    inc_amount: float = Field(allow_inf_nan=False)

    @field_validator("inc_amount", mode="before")
    @classmethod
    def require_number(cls, v, info: ValidationInfo):
        return _require_number(v, info)


class UpdateRiskProfileRequest(BaseModel):
    """Overwrite offsite and risk; amount and high tide untouched."""
    model_config = ConfigDict(extra="forbid")

    offsite: float = Field(ge=0, allow_inf_nan=False)
    risk: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("offsite", "risk", mode="before")
    @classmethod
    def require_number(cls, v, info: ValidationInfo):
        return _require_number(v, info)


class InvestmentResponse(BaseModel):
    """Public view of a position."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    amount: float
    risk: float
    offsite: float
    high_tide: float

    @computed_field
    @property
    def max_loss_contribution(self) -> float:
        return capped_contribution(self.amount, self.offsite, self.risk)


class UserBalanceResponse(BaseModel):
    """Public view of a user's free balance."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    balance_satoshis: float


class InvestmentCreatedResponse(BaseModel):
    user: UserBalanceResponse
    investment: InvestmentResponse


class HasInvestmentResponse(BaseModel):
    has_investment: bool


class MaxLossResponse(BaseModel):
    max_loss: float
