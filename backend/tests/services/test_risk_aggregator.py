"""Risk Aggregator — SUM(min((amount + offsite) * risk, amount)) over all positions."""

import pytest

from bankroll.services.investment_ledger import InvestmentLedger
from bankroll.services.risk_aggregator import RiskAggregator

from tests.services.ledger_helpers import add_investment, add_user


async def test_max_loss_is_zero_without_positions(store):
    assert await RiskAggregator(store).calculate_max_loss() == 0


async def test_max_loss_caps_contribution_at_amount(store, seed_user):
    await add_investment(store, seed_user, amount=100, offsite=50, risk=2)

    # (100 + 50) * 2 = 300, capped at 100
    assert await RiskAggregator(store).calculate_max_loss() == 100


async def test_max_loss_keeps_contribution_below_amount(store, seed_user):
    await add_investment(store, seed_user, amount=100, offsite=0, risk=0.25)

    assert await RiskAggregator(store).calculate_max_loss() == pytest.approx(25)


async def test_max_loss_sums_capped_rows(store, seed_user):
    bob = await add_user(store, username="bob")
    carol = await add_user(store, username="carol")
    await add_investment(store, seed_user, amount=100, offsite=50, risk=2)   # 100
    await add_investment(store, bob, amount=200, offsite=200, risk=0.1)      # 40
    await add_investment(store, carol, amount=60, offsite=0, risk=1)         # 60

    assert await RiskAggregator(store).calculate_max_loss() == pytest.approx(200)


async def test_max_loss_drops_divested_positions(store, seed_user):
    bob = await add_user(store, username="bob")
    await add_investment(store, seed_user, amount=100, risk=1)
    await add_investment(store, bob, amount=30, risk=1)

    await InvestmentLedger(store).divest_all(seed_user.id)

    assert await RiskAggregator(store).calculate_max_loss() == 30
