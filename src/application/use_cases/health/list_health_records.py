from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.queries.filters import sort_newest_first
from src.domain.models.health_record import HealthRecord


async def execute(uow: UnitOfWork, *, sheep_id: str | None = None) -> list[HealthRecord]:
    """List health records, newest first, optionally for one animal."""
    records = await uow.health_records.get_all()
    if sheep_id is not None:
        records = [r for r in records if r.sheep_id == sheep_id]
    return sort_newest_first(records)
