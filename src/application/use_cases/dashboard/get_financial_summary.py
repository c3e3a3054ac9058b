from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.queries.filters import TransactionFilters, apply_filters
from src.application.queries.metrics import FinancialSummary, compute_financial_summary


async def execute(
    uow: UnitOfWork, filters: TransactionFilters | None = None
) -> FinancialSummary:
    transactions = await uow.transactions.get_all()
    if filters is not None:
        animals = await uow.animals.get_all()
        _, transactions = apply_filters(animals, transactions, filters)
    return compute_financial_summary(transactions)
