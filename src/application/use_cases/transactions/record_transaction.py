from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import AnimalNotActive, AnimalNotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.validation import (
    require_amount,
    require_choice,
    require_date,
    require_text,
)
from src.domain.models.animal import Animal
from src.domain.models.transaction import Transaction
from src.domain.value_objects.transaction_type import TransactionType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordTransactionInput:
    type: str
    amount: Decimal | float | str | None
    date: date | str | None
    description: str
    sheep_id: str | None = None


@dataclass(slots=True)
class RecordTransactionOutput:
    transaction: Transaction
    animal_updated: Animal | None = None  # set when a sale marked the animal sold


@dataclass(slots=True)
class ValidatedTransaction:
    type: TransactionType
    amount: Decimal
    date: date
    description: str
    sheep_id: str | None


def validate(
    kind_value: str, amount, date_value, description: str, sheep_id: str | None
) -> ValidatedTransaction:
    kind = require_choice(TransactionType, kind_value, "type")
    sheep_id = (sheep_id or "").strip() or None
    if kind is TransactionType.SALE and sheep_id is None:
        raise ValidationError("A sale must reference an animal", details={"field": "sheep_id"})
    return ValidatedTransaction(
        type=kind,
        amount=require_amount(amount, "amount"),
        date=require_date(date_value, "date"),
        description=require_text(description, "description"),
        sheep_id=sheep_id,
    )


async def execute(uow: UnitOfWork, payload: RecordTransactionInput) -> RecordTransactionOutput:
    """Add a transaction. A sale marks its animal sold before the transaction is stored.

    The two collections are saved one after the other; a failure between the
    saves leaves the animal sold without its sale.
    """
    data = validate(
        payload.type, payload.amount, payload.date, payload.description, payload.sheep_id
    )

    animal_updated = None
    if data.type is TransactionType.SALE:
        animals = await uow.animals.get_all()
        animal = next((a for a in animals if a.id == data.sheep_id), None)
        if animal is None:
            raise AnimalNotFound(f"Animal with ID {data.sheep_id} not found!")
        if not animal.is_active:
            raise AnimalNotActive(
                f"Active animal with ID {data.sheep_id} not found!",
                details={"status": animal.status},
            )
        animal.mark_sold()
        await uow.animals.save_all(animals)
        animal_updated = animal

    transactions = await uow.transactions.get_all()
    transaction = Transaction.create(
        type=data.type.value,
        amount=data.amount,
        date=data.date,
        description=data.description,
        sheep_id=data.sheep_id,
        existing_ids=(t.id for t in transactions),
    )
    transactions.append(transaction)
    await uow.transactions.save_all(transactions)
    logger.info("Recorded %s transaction %s", transaction.type, transaction.id)
    return RecordTransactionOutput(transaction=transaction, animal_updated=animal_updated)
