from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from src.application.queries.filters import sort_newest_first
from src.domain.models.animal import Animal
from src.domain.models.transaction import Transaction
from src.domain.value_objects.animal_type import AnimalType
from src.domain.value_objects.transaction_type import TransactionType
from src.utils.datetime_tz import local_today

RECENT_TRANSACTIONS_LIMIT = 5


@dataclass(slots=True)
class FinancialSummary:
    total_sales: Decimal = Decimal("0")
    total_purchases: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")


@dataclass(slots=True)
class DashboardMetrics:
    total_animals: int = 0
    total_sheep: int = 0
    total_goats: int = 0
    total_ewes: int = 0
    total_rams: int = 0
    total_young: int = 0  # lambs and kids
    by_gender: dict[str, int] = field(default_factory=dict)
    total_value: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    recent_transactions: list[Transaction] = field(default_factory=list)


def _sum_amounts(transactions: Iterable[Transaction], kind: TransactionType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == kind), Decimal("0"))


def compute_financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    items = list(transactions)
    sales = _sum_amounts(items, TransactionType.SALE)
    purchases = _sum_amounts(items, TransactionType.PURCHASE)
    expenses = _sum_amounts(items, TransactionType.EXPENSE)
    return FinancialSummary(
        total_sales=sales,
        total_purchases=purchases,
        total_expenses=expenses,
        net_profit=sales - purchases - expenses,
    )


def compute_dashboard_metrics(
    animals: Sequence[Animal],
    transactions: Sequence[Transaction],
    *,
    recent_limit: int = RECENT_TRANSACTIONS_LIMIT,
) -> DashboardMetrics:
    """Metrics over already-filtered snapshots."""
    by_type = Counter(a.animal_type for a in animals)
    by_gender = Counter(a.gender for a in animals)
    total_value = sum(
        (a.purchase_cost for a in animals if a.is_active),
        Decimal("0"),
    )
    summary = compute_financial_summary(transactions)
    return DashboardMetrics(
        total_animals=len(animals),
        total_sheep=by_type[AnimalType.SHEEP.value],
        total_goats=by_type[AnimalType.GOAT.value],
        total_ewes=by_gender["Ewe"],
        total_rams=by_gender["Ram"],
        total_young=by_gender["Lamb"] + by_gender["Kid"],
        by_gender=dict(by_gender),
        total_value=total_value,
        net_profit=summary.net_profit,
        recent_transactions=sort_newest_first(transactions)[:recent_limit],
    )


def animal_age_years(birth_date: date | None, today: date | None = None) -> int | None:
    """Whole years since birth; None when the birth date is unknown."""
    if birth_date is None:
        return None
    today = today or local_today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
