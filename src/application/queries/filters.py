from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from src.domain.models.animal import Animal
from src.domain.models.transaction import Transaction
from src.utils.datetime_tz import local_today, parse_iso_date

ALL = "all"


class Period(str, Enum):
    ALL = "all"
    THIS_MONTH = "this_month"
    THIS_YEAR = "this_year"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: str | Period | None) -> Period | None:
        """Accepts snake_case and the camelCase names used by the old UI."""
        if value is None:
            return cls.ALL
        if isinstance(value, Period):
            return value
        key = value.strip()
        key = {"thisMonth": "this_month", "thisYear": "this_year"}.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


@dataclass(slots=True)
class TransactionFilters:
    animal_type: str = ALL
    period: str = Period.ALL.value
    start_date: date | str | None = None
    end_date: date | str | None = None


def filter_animals_by_type(animals: Iterable[Animal], animal_type: str | None) -> list[Animal]:
    if not animal_type or animal_type == ALL:
        return list(animals)
    return [a for a in animals if a.animal_type == animal_type]


def filter_transactions_by_animal(
    transactions: Iterable[Transaction],
    animal_type: str | None,
    animals: Iterable[Animal],
) -> list[Transaction]:
    if not animal_type or animal_type == ALL:
        return list(transactions)
    animal_ids = {a.id for a in animals if a.animal_type == animal_type}
    # Transactions without an animal never match a specific type
    return [t for t in transactions if t.sheep_id and t.sheep_id in animal_ids]


def period_bounds(
    period: str | Period | None,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    *,
    today: date | None = None,
) -> tuple[date, date] | None:
    """Inclusive (start, end) for a period, or None when nothing should be filtered."""
    resolved = Period.parse(period)
    today = today or local_today()
    if resolved is Period.THIS_MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    if resolved is Period.THIS_YEAR:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if resolved is Period.CUSTOM:
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        if start is None or end is None:
            return None
        return start, end
    return None


def filter_transactions_by_period(
    transactions: Iterable[Transaction],
    period: str | Period | None,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    *,
    today: date | None = None,
) -> list[Transaction]:
    bounds = period_bounds(period, start_date, end_date, today=today)
    if bounds is None:
        return list(transactions)
    start, end = bounds
    return [t for t in transactions if start <= t.date <= end]


def apply_filters(
    animals: Sequence[Animal],
    transactions: Sequence[Transaction],
    filters: TransactionFilters | None,
    *,
    today: date | None = None,
) -> tuple[list[Animal], list[Transaction]]:
    """Animal-type filter first, then period, as the dashboard applies them."""
    if filters is None:
        return list(animals), list(transactions)
    filtered_animals = filter_animals_by_type(animals, filters.animal_type)
    filtered_transactions = filter_transactions_by_animal(
        transactions, filters.animal_type, animals
    )
    filtered_transactions = filter_transactions_by_period(
        filtered_transactions,
        filters.period,
        filters.start_date,
        filters.end_date,
        today=today,
    )
    return filtered_animals, filtered_transactions


def sort_newest_first(records: Iterable) -> list:
    return sorted(records, key=lambda r: r.date, reverse=True)
