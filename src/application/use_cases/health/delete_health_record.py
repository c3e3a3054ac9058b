from __future__ import annotations

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, record_id: str) -> None:
    """Delete a health record. A deleted death record does not revive the animal."""
    records = await uow.health_records.get_all()
    remaining = [r for r in records if r.id != record_id]
    if len(remaining) == len(records):
        raise NotFound(f"Health record {record_id} not found")
    await uow.health_records.save_all(remaining)
