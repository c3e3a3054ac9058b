from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from src.domain.value_objects.transaction_type import TransactionType
from src.utils.datetime_tz import local_today
from src.utils.record_ids import new_record_id


@dataclass(slots=True)
class Transaction:
    id: str
    type: str  # TransactionType
    amount: Decimal
    date: date
    description: str
    sheep_id: str | None = None
    date_added: date = field(default_factory=local_today)

    @classmethod
    def create(
        cls,
        *,
        type: str,
        amount: Decimal,
        date: date,
        description: str,
        sheep_id: str | None = None,
        existing_ids: Iterable[str] = (),
    ) -> Transaction:
        return cls(
            id=new_record_id(existing_ids),
            type=type,
            amount=amount,
            date=date,
            description=description,
            sheep_id=sheep_id or None,
            date_added=local_today(),
        )

    @property
    def is_sale(self) -> bool:
        return self.type == TransactionType.SALE
