from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.queries.filters import ALL, filter_animals_by_type
from src.domain.models.animal import Animal


async def execute(uow: UnitOfWork, *, animal_type: str = ALL) -> list[Animal]:
    animals = await uow.animals.get_all()
    filtered = filter_animals_by_type(animals, animal_type)
    # Newest additions first
    return sorted(filtered, key=lambda a: a.date_added, reverse=True)
