from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from src.domain.value_objects.health_record_type import HealthRecordType
from src.utils.datetime_tz import local_today
from src.utils.record_ids import new_record_id


@dataclass(slots=True)
class HealthRecord:
    id: str
    sheep_id: str
    type: str  # HealthRecordType
    date: date
    weight: Decimal | None = None
    medication: str = ""
    notes: str = ""
    date_added: date = field(default_factory=local_today)

    @classmethod
    def create(
        cls,
        *,
        sheep_id: str,
        type: str,
        date: date,
        weight: Decimal | None = None,
        medication: str | None = None,
        notes: str | None = None,
        existing_ids: Iterable[str] = (),
    ) -> HealthRecord:
        return cls(
            id=new_record_id(existing_ids),
            sheep_id=sheep_id,
            type=type,
            date=date,
            weight=weight,
            medication=medication or "",
            notes=notes or "",
            date_added=local_today(),
        )

    @property
    def is_death(self) -> bool:
        return self.type == HealthRecordType.DEATH
