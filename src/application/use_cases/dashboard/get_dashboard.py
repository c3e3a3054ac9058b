from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.queries.filters import TransactionFilters, apply_filters
from src.application.queries.metrics import DashboardMetrics, compute_dashboard_metrics


async def execute(uow: UnitOfWork, filters: TransactionFilters | None = None) -> DashboardMetrics:
    animals = await uow.animals.get_all()
    transactions = await uow.transactions.get_all()
    animals, transactions = apply_filters(animals, transactions, filters)
    return compute_dashboard_metrics(animals, transactions)
