"""DatabaseSessionManager — scoped transactions commit or roll back as a unit."""

import pytest
from sqlalchemy import text

from bankroll.core.errors import DatabaseError, InvestmentExistsError
from bankroll.services import investment_store

from tests.services.ledger_helpers import (
    add_investment, read_balance, read_investment,
)


async def test_run_in_transaction_commits_on_success(store, seed_user):
    async def _debit(db):
        return await investment_store.adjust_balance(db, seed_user.id, -10)

    user = await store.run_in_transaction(_debit)

    assert user.balance_satoshis == 990
    assert await read_balance(store, seed_user.id) == 990


async def test_run_in_transaction_rolls_back_domain_error(store, seed_user):
    async def _insert_then_fail(db):
        await investment_store.insert_investment(db, seed_user.id, 100, 1, 0)
        await investment_store.adjust_balance(db, seed_user.id, -100)
        raise InvestmentExistsError(str(seed_user.id))

    with pytest.raises(InvestmentExistsError):
        await store.run_in_transaction(_insert_then_fail)

    assert await read_investment(store, seed_user.id) is None
    assert await read_balance(store, seed_user.id) == 1000


async def test_storage_failure_maps_to_database_error(store, seed_user):
    async def _broken(db):
        await investment_store.adjust_balance(db, seed_user.id, -100)
        await db.execute(text("SELECT * FROM no_such_table"))

    with pytest.raises(DatabaseError) as exc_info:
        await store.run_in_transaction(_broken)

    assert exc_info.value.http_status == 503
    assert await read_balance(store, seed_user.id) == 1000


async def test_check_constraint_rejects_non_positive_risk(store, seed_user):
    await add_investment(store, seed_user, amount=100)

    async def _bad_risk(db):
        return await investment_store.update_risk_profile(db, seed_user.id, 0, -1)

    with pytest.raises(DatabaseError):
        await store.run_in_transaction(_bad_risk)

    assert (await read_investment(store, seed_user.id)).risk == 1


async def test_health_check_reports_reachable_db(store):
    assert await store.health_check() is True
