from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import AnimalNotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.validation import (
    optional_text,
    require_choice,
    require_date,
    require_text,
    to_amount,
)
from src.domain.models.animal import Animal
from src.domain.models.health_record import HealthRecord
from src.domain.value_objects.health_record_type import HealthRecordType

logger = logging.getLogger(__name__)


@dataclass
class CreateHealthRecordInput:
    sheep_id: str
    type: str
    date: date | str | None
    weight: Decimal | float | str | None = None
    medication: str | None = None
    notes: str | None = None


@dataclass
class CreateHealthRecordOutput:
    health_record: HealthRecord
    animal_updated: bool = False  # True if a death record marked the animal dead


async def mark_dead_if_death(
    uow: UnitOfWork, sheep_id: str, record_type: HealthRecordType
) -> bool:
    """Check the animal exists; for a death record, mark it dead and save animals."""
    animals = await uow.animals.get_all()
    animal: Animal | None = next((a for a in animals if a.id == sheep_id), None)
    if animal is None:
        raise AnimalNotFound(f"Animal with ID {sheep_id} not found!")
    if record_type is not HealthRecordType.DEATH:
        return False
    animal.mark_dead()
    await uow.animals.save_all(animals)
    logger.info("Animal %s marked as deceased", sheep_id)
    return True


async def execute(uow: UnitOfWork, payload: CreateHealthRecordInput) -> CreateHealthRecordOutput:
    """Create a health record; a death record marks the animal dead first."""
    sheep_id = require_text(payload.sheep_id, "sheep_id")
    record_type = require_choice(HealthRecordType, payload.type, "type")
    record_date = require_date(payload.date, "date")
    weight = to_amount(payload.weight, "weight")

    animal_updated = await mark_dead_if_death(uow, sheep_id, record_type)

    records = await uow.health_records.get_all()
    record = HealthRecord.create(
        sheep_id=sheep_id,
        type=record_type.value,
        date=record_date,
        weight=weight,
        medication=optional_text(payload.medication),
        notes=optional_text(payload.notes),
        existing_ids=(r.id for r in records),
    )
    records.append(record)
    await uow.health_records.save_all(records)

    return CreateHealthRecordOutput(health_record=record, animal_updated=animal_updated)
