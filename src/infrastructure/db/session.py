from __future__ import annotations

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.application.errors import NotReady
from src.application.interfaces.record_store import RecordStore
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


class MutationGate:
    """Readiness flag plus the lock that serializes every unit of work.

    One gate is shared by all units of work over the same store and by the
    snapshot flusher, so a flush never overlaps an in-flight save.
    """

    def __init__(self) -> None:
        self._ready = False
        self._lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return self._ready

    def mark_ready(self) -> None:
        if not self._ready:
            self._ready = True
            logger.info("Record store ready")

    def locked(self) -> bool:
        return self._lock.locked()

    async def acquire(self) -> None:
        await self._lock.acquire()

    def release(self) -> None:
        self._lock.release()


class FarmUnitOfWork(UnitOfWork):
    def __init__(self, store: RecordStore, gate: MutationGate) -> None:
        self._store = store
        self._gate = gate
        self._entered = False
        self.animals = None
        self.transactions = None
        self.health_records = None

    async def __aenter__(self) -> UnitOfWork:
        if not self._gate.ready:
            raise NotReady("Database not ready")
        await self._gate.acquire()
        self._entered = True
        from src.infrastructure.repos.animals_repository import AnimalsRecordRepository
        from src.infrastructure.repos.health_records_repository import (
            HealthRecordsRecordRepository,
        )
        from src.infrastructure.repos.transactions_repository import (
            TransactionsRecordRepository,
        )

        self.animals = AnimalsRecordRepository(self._store)
        self.transactions = TransactionsRecordRepository(self._store)
        self.health_records = HealthRecordsRecordRepository(self._store)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self._entered:
            return
        try:
            if exc is not None:
                logger.info("Unit of work aborted: %s", exc)
        finally:
            self._entered = False
            self.animals = None
            self.transactions = None
            self.health_records = None
            self._gate.release()
