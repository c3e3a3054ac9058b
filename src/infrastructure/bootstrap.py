from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.application.errors import AppError, StorageUnavailable, describe_error
from src.application.interfaces.record_store import Collection, RecordStore
from src.config.logging import configure_logging
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import FarmUnitOfWork, MutationGate
from src.infrastructure.scheduler.snapshot_flush import SnapshotFlusher
from src.infrastructure.storage.legacy_import import import_legacy_blobs
from src.infrastructure.storage.memory_store import InMemoryRecordStore
from src.infrastructure.storage.sqlalchemy_store import SQLAlchemyRecordStore

logger = logging.getLogger(__name__)


@dataclass
class FarmRecords:
    """Everything the presentation layer needs after startup."""

    store: RecordStore
    gate: MutationGate
    durable_store: RecordStore | None = None
    flusher: SnapshotFlusher | None = None
    degraded: bool = False

    def unit_of_work(self) -> FarmUnitOfWork:
        return FarmUnitOfWork(self.store, self.gate)

    async def close(self) -> None:
        if self.flusher is not None:
            await self.flusher.stop(final_flush=True)
        if self.durable_store is not None:
            await self.durable_store.close()
        if self.store is not self.durable_store:
            await self.store.close()


async def open_records(
    settings: Settings | None = None,
    *,
    store: RecordStore | None = None,
) -> FarmRecords:
    """Initialize storage, import legacy data, then flip the readiness flag."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    gate = MutationGate()
    durable = store or SQLAlchemyRecordStore(settings.database_url)

    try:
        await durable.initialize()
    except StorageUnavailable:
        if not settings.allow_memory_fallback:
            raise
        logger.warning(
            "Database unavailable; running from memory. Changes will not survive a restart."
        )
        await durable.close()
        fallback = InMemoryRecordStore()
        await fallback.initialize()
        gate.mark_ready()
        return FarmRecords(store=fallback, gate=gate, degraded=True)

    try:
        if settings.legacy_data_dir is not None:
            await _import_legacy(durable, settings.legacy_data_dir)

        records = FarmRecords(store=durable, gate=gate, durable_store=durable)
        if settings.use_working_copy:
            working = InMemoryRecordStore()
            await working.initialize()
            for collection in Collection:
                await working.replace_all(collection, await durable.read_all(collection))
            records.store = working
            records.flusher = SnapshotFlusher(
                working, durable, gate, interval_seconds=settings.flush_interval_seconds
            )
            records.flusher.start()
    except Exception:
        await durable.close()
        raise

    gate.mark_ready()
    return records


async def _import_legacy(store: RecordStore, directory: Path) -> None:
    # Bad leftover blobs stay on disk and never keep the app from starting
    try:
        await import_legacy_blobs(store, directory, skip_invalid=True)
    except AppError as exc:
        logger.error("Legacy import from %s skipped: %s", directory, describe_error(exc))
