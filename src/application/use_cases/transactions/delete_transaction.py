from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.animal_status import AnimalStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeleteTransactionOutput:
    reactivated_animal_id: str | None = None


async def execute(uow: UnitOfWork, transaction_id: str) -> DeleteTransactionOutput:
    transactions = await uow.transactions.get_all()
    removed = next((t for t in transactions if t.id == transaction_id), None)
    if removed is None:
        raise NotFound(f"Transaction {transaction_id} not found")
    await uow.transactions.save_all([t for t in transactions if t.id != transaction_id])
    logger.info("Deleted transaction %s", transaction_id)

    if not (removed.is_sale and removed.sheep_id):
        return DeleteTransactionOutput()

    # Undoing a sale puts the animal back to active whatever its status is now
    animals = await uow.animals.get_all()
    animal = next((a for a in animals if a.id == removed.sheep_id), None)
    if animal is None:
        logger.info("Sale %s referenced missing animal %s", transaction_id, removed.sheep_id)
        return DeleteTransactionOutput()
    if animal.status != AnimalStatus.SOLD:
        logger.warning(
            "Reactivating animal %s from status %s after sale %s was deleted",
            animal.id,
            animal.status,
            transaction_id,
        )
    animal.reactivate()
    await uow.animals.save_all(animals)
    return DeleteTransactionOutput(reactivated_animal_id=animal.id)
