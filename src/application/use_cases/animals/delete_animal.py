from __future__ import annotations

import logging

from src.application.errors import AnimalNotFound
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, animal_id: str) -> None:
    # Transactions and health records that reference the animal are left as they are
    animals = await uow.animals.get_all()
    remaining = [a for a in animals if a.id != animal_id]
    if len(remaining) == len(animals):
        raise AnimalNotFound(f"Animal with ID {animal_id} not found!")
    await uow.animals.save_all(remaining)
    logger.info("Deleted animal %s", animal_id)
