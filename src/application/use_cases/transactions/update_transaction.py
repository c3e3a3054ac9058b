from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import AnimalNotFound, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.transactions.record_transaction import validate
from src.domain.models.transaction import Transaction
from src.domain.value_objects.transaction_type import TransactionType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateTransactionInput:
    transaction_id: str
    type: str
    amount: Decimal | float | str | None
    date: date | str | None
    description: str
    sheep_id: str | None = None


async def execute(uow: UnitOfWork, payload: UpdateTransactionInput) -> Transaction:
    """Replace a transaction with edited values.

    Editing into a sale marks the animal sold without re-checking that it is
    active; only creation enforces that.
    """
    data = validate(
        payload.type, payload.amount, payload.date, payload.description, payload.sheep_id
    )

    transactions = await uow.transactions.get_all()
    index = next(
        (i for i, t in enumerate(transactions) if t.id == payload.transaction_id), None
    )
    if index is None:
        raise NotFound(f"Transaction {payload.transaction_id} not found")

    if data.type is TransactionType.SALE:
        animals = await uow.animals.get_all()
        animal = next((a for a in animals if a.id == data.sheep_id), None)
        if animal is None:
            raise AnimalNotFound(f"Animal with ID {data.sheep_id} not found!")
        animal.mark_sold()
        await uow.animals.save_all(animals)

    updated = Transaction(
        id=payload.transaction_id,
        type=data.type.value,
        amount=data.amount,
        date=data.date,
        description=data.description,
        sheep_id=data.sheep_id,
        date_added=transactions[index].date_added,
    )
    transactions[index] = updated
    await uow.transactions.save_all(transactions)
    logger.info("Updated transaction %s", updated.id)
    return updated
