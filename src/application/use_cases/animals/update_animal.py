from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import AnimalNotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.animals.create_animal import ensure_gender_matches
from src.application.use_cases.validation import (
    optional_date,
    optional_text,
    require_choice,
    require_text,
    to_amount,
)
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AdditionType, AnimalType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateAnimalInput:
    animal_type: str | None = None
    gender: str | None = None
    purchase_cost: Decimal | float | str | None = None
    status: str | None = None
    notes: str | None = None
    birth_date: date | str | None = None
    addition_type: str | None = None


async def execute(uow: UnitOfWork, animal_id: str, payload: UpdateAnimalInput) -> Animal:
    """Edit an animal in place. Fields left as None keep their stored value.

    Status is not editable: it follows sales and death records only. Submitting
    the current status is accepted so an edit form can send it back unchanged.
    """
    animals = await uow.animals.get_all()
    existing = next((a for a in animals if a.id == animal_id), None)
    if existing is None:
        raise AnimalNotFound(f"Animal with ID {animal_id} not found!")

    if payload.status is not None:
        status = require_choice(AnimalStatus, payload.status, "status")
        if status != existing.status:
            raise ValidationError(
                f"Status of {animal_id} changes only through sales and death records",
                details={"field": "status", "current": existing.status},
            )
    if payload.animal_type is not None:
        existing.animal_type = require_choice(AnimalType, payload.animal_type, "animal_type").value
    if payload.gender is not None:
        existing.gender = require_text(payload.gender, "gender")
    # Older records may carry a gender from the other species; only a new pair is checked
    if payload.animal_type is not None or payload.gender is not None:
        ensure_gender_matches(AnimalType(existing.animal_type), existing.gender)
    if payload.addition_type is not None:
        existing.addition_type = require_choice(
            AdditionType, payload.addition_type, "addition_type"
        ).value
    if payload.birth_date is not None:
        existing.birth_date = optional_date(payload.birth_date, "birth_date")
    if payload.notes is not None:
        existing.notes = optional_text(payload.notes)
    if payload.purchase_cost is not None:
        existing.purchase_cost = to_amount(payload.purchase_cost, "purchase_cost") or Decimal("0")
    if existing.addition_type == AdditionType.BIRTH:
        existing.purchase_cost = Decimal("0")

    await uow.animals.save_all(animals)
    logger.info("Updated animal %s", animal_id)
    return existing
