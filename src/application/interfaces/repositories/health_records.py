from __future__ import annotations

from typing import Protocol, Sequence

from src.domain.models.health_record import HealthRecord


class HealthRecordRepository(Protocol):
    async def get_all(self) -> list[HealthRecord]: ...

    async def save_all(self, records: Sequence[HealthRecord]) -> None: ...
