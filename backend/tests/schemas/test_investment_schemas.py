"""Investment Schemas — numeric validation per operation."""

import math

import pytest
from pydantic import ValidationError

from bankroll.schemas.investment import (
    CreateInvestmentRequest, IncrementAmountRequest,
    InvestmentResponse, UpdateRiskProfileRequest,
)


def test_create_defaults_offsite_to_zero():
    assert CreateInvestmentRequest(amount=10, risk=1).offsite == 0


def test_create_treats_null_offsite_as_zero():
    assert CreateInvestmentRequest(amount=10, risk=1, offsite=None).offsite == 0


@pytest.mark.parametrize("payload", [
    {"amount": 0, "risk": 1},
    {"amount": 10, "risk": -1},
    {"amount": 10, "risk": 1, "offsite": -5},
    {"amount": True, "risk": 1},
    {"amount": "10", "risk": 1},
    {"amount": math.inf, "risk": 1},
    {"amount": 10, "risk": math.nan},
    {"amount": 10, "risk": 1, "incAmount": 2},
])
def test_create_rejects_invalid(payload):
    with pytest.raises(ValidationError):
        CreateInvestmentRequest.model_validate(payload)


def test_increment_accepts_negative():
    assert IncrementAmountRequest(inc_amount=-3).inc_amount == -3


def test_increment_rejects_bool():
    with pytest.raises(ValidationError):
        IncrementAmountRequest(inc_amount=True)


def test_update_risk_profile_requires_both():
    with pytest.raises(ValidationError):
        UpdateRiskProfileRequest.model_validate({"offsite": 5})
    with pytest.raises(ValidationError):
        UpdateRiskProfileRequest.model_validate({"risk": 2})


def test_investment_response_reports_capped_contribution():
    response = InvestmentResponse(
        id="00000000-0000-0000-0000-000000000001",
        user_id="00000000-0000-0000-0000-000000000002",
        amount=100, risk=2, offsite=50, high_tide=100,
    )
    assert response.max_loss_contribution == 100
    assert response.model_dump()["max_loss_contribution"] == 100
