from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.application.queries.filters import (
    Period,
    TransactionFilters,
    apply_filters,
    filter_transactions_by_animal,
    filter_transactions_by_period,
    period_bounds,
)
from src.application.queries.metrics import (
    animal_age_years,
    compute_dashboard_metrics,
    compute_financial_summary,
)
from src.application.use_cases.dashboard import get_dashboard, get_financial_summary
from src.application.use_cases.transactions import record_transaction
from src.domain.models.animal import Animal
from src.domain.models.transaction import Transaction


def _tx(tx_id: str, kind: str, amount: str, on: str, sheep_id: str | None = None):
    return Transaction(
        id=tx_id,
        type=kind,
        amount=Decimal(amount),
        date=date.fromisoformat(on),
        description=kind,
        sheep_id=sheep_id,
    )


def test_financial_summary_nets_sales_against_costs():
    summary = compute_financial_summary(
        [
            _tx("1", "sale", "100", "2024-01-10"),
            _tx("2", "purchase", "30", "2024-01-11"),
            _tx("3", "expense", "10", "2024-01-12"),
        ]
    )
    assert summary.total_sales == Decimal("100")
    assert summary.total_purchases == Decimal("30")
    assert summary.total_expenses == Decimal("10")
    assert summary.net_profit == Decimal("60")


def test_financial_summary_of_nothing_is_zero():
    assert compute_financial_summary([]).net_profit == Decimal("0")


def test_custom_period_is_inclusive():
    txs = [
        _tx("1", "expense", "1", "2024-01-01"),
        _tx("2", "expense", "1", "2024-01-15"),
        _tx("3", "expense", "1", "2024-01-31"),
        _tx("4", "expense", "1", "2024-02-01"),
    ]
    kept = filter_transactions_by_period(txs, "custom", "2024-01-01", "2024-01-31")
    assert [t.id for t in kept] == ["1", "2", "3"]


def test_custom_period_missing_bound_filters_nothing():
    txs = [_tx("1", "expense", "1", "2020-06-01")]
    assert filter_transactions_by_period(txs, "custom", "2024-01-01", None) == txs
    assert filter_transactions_by_period(txs, "custom", "garbage", "2024-01-31") == txs


@pytest.mark.parametrize("name", ["this_month", "thisMonth"])
def test_this_month_uses_today(name):
    today = date(2024, 2, 14)
    assert period_bounds(name, today=today) == (date(2024, 2, 1), date(2024, 2, 29))
    txs = [
        _tx("1", "expense", "1", "2024-02-29"),
        _tx("2", "expense", "1", "2024-01-31"),
        _tx("3", "expense", "1", "2023-02-10"),
    ]
    assert [t.id for t in filter_transactions_by_period(txs, name, today=today)] == ["1"]


def test_this_year_and_unknown_period():
    today = date(2024, 7, 1)
    assert period_bounds(Period.THIS_YEAR, today=today) == (date(2024, 1, 1), date(2024, 12, 31))
    assert period_bounds("thisYear", today=today) == (date(2024, 1, 1), date(2024, 12, 31))
    assert period_bounds("fortnight", today=today) is None
    assert period_bounds(None, today=today) is None


def test_animal_filter_drops_unlinked_transactions():
    animals = [
        Animal(id="S1", gender="Ewe", animal_type="sheep"),
        Animal(id="G1", gender="Doe", animal_type="goat"),
    ]
    txs = [
        _tx("1", "sale", "50", "2024-01-01", "S1"),
        _tx("2", "sale", "60", "2024-01-02", "G1"),
        _tx("3", "expense", "5", "2024-01-03"),
    ]
    assert [t.id for t in filter_transactions_by_animal(txs, "goat", animals)] == ["2"]
    assert len(filter_transactions_by_animal(txs, "all", animals)) == 3


def test_apply_filters_combines_type_and_period():
    animals = [
        Animal(id="S1", gender="Ewe", animal_type="sheep"),
        Animal(id="S2", gender="Ram", animal_type="sheep"),
        Animal(id="G1", gender="Doe", animal_type="goat"),
    ]
    txs = [
        _tx("1", "sale", "50", "2024-01-05", "S1"),
        _tx("2", "sale", "60", "2024-03-02", "S2"),
        _tx("3", "sale", "70", "2024-01-09", "G1"),
    ]
    kept_animals, kept = apply_filters(
        animals,
        txs,
        TransactionFilters(
            animal_type="sheep", period="custom", start_date="2024-01-01", end_date="2024-01-31"
        ),
    )
    assert [a.id for a in kept_animals] == ["S1", "S2"]
    assert [t.id for t in kept] == ["1"]


def test_dashboard_metrics_counts_and_value():
    animals = [
        Animal(id="S1", gender="Ewe", purchase_cost=Decimal("100")),
        Animal(id="S2", gender="Ram", purchase_cost=Decimal("150"), status="sold"),
        Animal(id="S3", gender="Lamb", addition_type="birth"),
        Animal(id="G1", gender="Kid", animal_type="goat", purchase_cost=Decimal("40")),
        Animal(id="G2", gender="Doe", animal_type="goat", purchase_cost=Decimal("60")),
    ]
    txs = [_tx(str(i), "expense", "1", f"2024-01-{i:02d}") for i in range(1, 8)]
    metrics = compute_dashboard_metrics(animals, txs)

    assert metrics.total_animals == 5
    assert metrics.total_sheep == 3
    assert metrics.total_goats == 2
    assert metrics.total_ewes == 1
    assert metrics.total_rams == 1
    assert metrics.total_young == 2
    assert metrics.by_gender["Doe"] == 1
    assert metrics.total_value == Decimal("200")
    assert metrics.net_profit == Decimal("-7")
    assert [t.id for t in metrics.recent_transactions] == ["7", "6", "5", "4", "3"]


def test_animal_age_years():
    assert animal_age_years(None) is None
    assert animal_age_years(date(2020, 6, 15), today=date(2024, 6, 14)) == 3
    assert animal_age_years(date(2020, 6, 15), today=date(2024, 6, 15)) == 4


@pytest.mark.asyncio
async def test_dashboard_use_cases_read_through_uow(make_uow, add_animal):
    await add_animal("S1", purchase_cost="100")
    await add_animal("G1", animal_type="goat", gender="Buck", purchase_cost="80")
    async with make_uow() as uow:
        await record_transaction.execute(
            uow,
            record_transaction.RecordTransactionInput(
                type="sale", amount="200", date="2024-01-10", description="x", sheep_id="G1"
            ),
        )

    async with make_uow() as uow:
        dashboard = await get_dashboard.execute(uow)
        goat_summary = await get_financial_summary.execute(
            uow, TransactionFilters(animal_type="goat")
        )
        sheep_summary = await get_financial_summary.execute(
            uow, TransactionFilters(animal_type="sheep")
        )

    assert dashboard.total_animals == 2
    assert dashboard.total_value == Decimal("100")
    assert goat_summary.total_sales == Decimal("200")
    assert sheep_summary.total_sales == Decimal("0")
