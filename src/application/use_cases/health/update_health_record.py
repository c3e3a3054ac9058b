from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.health.create_health_record import mark_dead_if_death
from src.application.use_cases.validation import (
    optional_text,
    require_choice,
    require_date,
    require_text,
    to_amount,
)
from src.domain.models.health_record import HealthRecord
from src.domain.value_objects.health_record_type import HealthRecordType


@dataclass
class UpdateHealthRecordInput:
    record_id: str
    sheep_id: str
    type: str
    date: date | str | None
    weight: Decimal | float | str | None = None
    medication: str | None = None
    notes: str | None = None


async def execute(uow: UnitOfWork, payload: UpdateHealthRecordInput) -> HealthRecord:
    """Replace a health record with edited values."""
    sheep_id = require_text(payload.sheep_id, "sheep_id")
    record_type = require_choice(HealthRecordType, payload.type, "type")
    record_date = require_date(payload.date, "date")
    weight = to_amount(payload.weight, "weight")

    records = await uow.health_records.get_all()
    index = next((i for i, r in enumerate(records) if r.id == payload.record_id), None)
    if index is None:
        raise NotFound(f"Health record {payload.record_id} not found")

    await mark_dead_if_death(uow, sheep_id, record_type)

    updated = HealthRecord(
        id=payload.record_id,
        sheep_id=sheep_id,
        type=record_type.value,
        date=record_date,
        weight=weight,
        medication=optional_text(payload.medication),
        notes=optional_text(payload.notes),
        date_added=records[index].date_added,
    )
    records[index] = updated
    await uow.health_records.save_all(records)
    return updated
