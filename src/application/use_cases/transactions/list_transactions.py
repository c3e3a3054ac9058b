from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.queries.filters import TransactionFilters, apply_filters, sort_newest_first
from src.domain.models.transaction import Transaction


async def execute(
    uow: UnitOfWork, filters: TransactionFilters | None = None
) -> list[Transaction]:
    transactions = await uow.transactions.get_all()
    if filters is not None:
        animals = await uow.animals.get_all()
        _, transactions = apply_filters(animals, transactions, filters)
    return sort_newest_first(transactions)
