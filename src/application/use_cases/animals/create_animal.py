from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import DuplicateId, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.validation import (
    optional_date,
    optional_text,
    require_choice,
    require_text,
    to_amount,
)
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_type import AdditionType, AnimalType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateAnimalInput:
    id: str
    gender: str
    animal_type: str = AnimalType.SHEEP.value
    addition_type: str = AdditionType.PURCHASE.value
    birth_date: date | str | None = None
    purchase_cost: Decimal | float | str | None = None
    notes: str | None = None


def ensure_gender_matches(animal_type: AnimalType, gender: str) -> None:
    if not animal_type.allows_gender(gender):
        raise ValidationError(
            f"{gender} is not a valid gender for {animal_type.value}",
            details={"field": "gender", "allowed": sorted(animal_type.genders())},
        )


async def execute(uow: UnitOfWork, payload: CreateAnimalInput) -> Animal:
    animal_id = require_text(payload.id, "id")
    animal_type = require_choice(AnimalType, payload.animal_type, "animal_type")
    addition_type = require_choice(AdditionType, payload.addition_type, "addition_type")
    gender = require_text(payload.gender, "gender")
    ensure_gender_matches(animal_type, gender)

    animals = await uow.animals.get_all()
    if any(a.id == animal_id for a in animals):
        raise DuplicateId(f"Animal with ID {animal_id} already exists!")

    animal = Animal.create(
        id=animal_id,
        gender=gender,
        animal_type=animal_type.value,
        birth_date=optional_date(payload.birth_date, "birth_date"),
        purchase_cost=to_amount(payload.purchase_cost, "purchase_cost"),
        notes=optional_text(payload.notes),
        addition_type=addition_type.value,
    )
    animals.append(animal)
    await uow.animals.save_all(animals)
    logger.info("Added %s %s via %s", animal.animal_type, animal.id, animal.addition_type)
    return animal
