from __future__ import annotations

import asyncio
import contextlib
import logging

from src.application.errors import AppError
from src.application.interfaces.record_store import Collection, RecordStore
from src.infrastructure.db.session import MutationGate

logger = logging.getLogger(__name__)


class SnapshotFlusher:
    """Periodically copies the in-memory working copy into durable storage.

    A tick that finds a unit of work in progress is skipped and left pending;
    the next tick picks it up. Flushes never run alongside a save.
    """

    def __init__(
        self,
        source: RecordStore,
        target: RecordStore,
        gate: MutationGate,
        *,
        interval_seconds: float = 5.0,
    ) -> None:
        self.source = source
        self.target = target
        self.gate = gate
        self.interval_seconds = interval_seconds
        self.pending = False
        self.flush_count = 0
        self.skipped_ticks = 0
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _copy_all(self) -> None:
        for collection in Collection:
            records = await self.source.read_all(collection)
            await self.target.replace_all(collection, records)

    async def flush_once(self) -> bool:
        """Flush now unless a unit of work holds the gate. Returns True if flushed."""
        if self.gate.locked():
            self.pending = True
            self.skipped_ticks += 1
            logger.debug("Flush deferred: save in progress")
            return False
        await self.flush()
        return True

    async def flush(self) -> None:
        """Flush now, waiting for any unit of work in progress to finish."""
        await self.gate.acquire()
        try:
            await self._copy_all()
        finally:
            self.gate.release()
        self.pending = False
        self.flush_count += 1
        logger.debug("Working copy flushed (%d)", self.flush_count)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.flush_once()
            except AppError as exc:
                # Durable contents are untouched by a failed replace; retry next tick
                self.pending = True
                logger.error("Periodic flush failed: %s", exc.message)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="snapshot-flush")
        logger.info("Snapshot flush every %.1fs", self.interval_seconds)

    async def stop(self, *, final_flush: bool = True) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if final_flush:
            await self.flush()
