from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AdditionType, AnimalType
from src.utils.datetime_tz import local_today


@dataclass(slots=True)
class Animal:
    id: str
    gender: str
    animal_type: str = AnimalType.SHEEP.value  # AnimalType
    birth_date: date | None = None
    purchase_cost: Decimal = Decimal("0")
    notes: str = ""
    status: str = AnimalStatus.ACTIVE.value  # AnimalStatus
    addition_type: str = AdditionType.PURCHASE.value  # AdditionType
    date_added: date = field(default_factory=local_today)

    @classmethod
    def create(
        cls,
        id: str,
        gender: str,
        animal_type: str = AnimalType.SHEEP.value,
        birth_date: date | None = None,
        purchase_cost: Decimal | None = None,
        notes: str | None = None,
        addition_type: str = AdditionType.PURCHASE.value,
    ) -> Animal:
        # Animals born on the farm carry no purchase cost
        cost = purchase_cost or Decimal("0")
        if addition_type == AdditionType.BIRTH:
            cost = Decimal("0")
        return cls(
            id=id,
            gender=gender,
            animal_type=animal_type,
            birth_date=birth_date,
            purchase_cost=cost,
            notes=notes or "",
            status=AnimalStatus.ACTIVE.value,
            addition_type=addition_type,
            date_added=local_today(),
        )

    @property
    def is_active(self) -> bool:
        return self.status == AnimalStatus.ACTIVE

    def mark_sold(self) -> None:
        self.status = AnimalStatus.SOLD.value

    def mark_dead(self) -> None:
        self.status = AnimalStatus.DEAD.value

    def reactivate(self) -> None:
        self.status = AnimalStatus.ACTIVE.value
