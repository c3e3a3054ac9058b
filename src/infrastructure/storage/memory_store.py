from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, Sequence

from src.application.errors import StorageError, ValidationError
from src.application.interfaces.record_store import (
    Collection,
    RawRecord,
    RecordStore,
    resolve_collection,
)

logger = logging.getLogger(__name__)


class InMemoryRecordStore(RecordStore):
    """Dict-backed store: the working copy flushed to durable storage, and the
    degraded-mode fallback when no durable medium can be opened."""

    def __init__(self) -> None:
        self._collections: dict[Collection, dict[str, RawRecord]] = {}

    async def initialize(self) -> None:
        for collection in Collection:
            self._collections.setdefault(collection, {})

    def _get(self, collection: Collection | str) -> dict[str, RawRecord]:
        resolved = resolve_collection(collection)
        try:
            return self._collections[resolved]
        except KeyError as exc:
            raise StorageError("In-memory store used before initialize()") from exc

    async def read_all(self, collection: Collection | str) -> list[RawRecord]:
        return [copy.deepcopy(record) for record in self._get(collection).values()]

    async def replace_all(
        self, collection: Collection | str, records: Sequence[Mapping[str, Any]]
    ) -> None:
        self._get(collection)
        # Build the full new contents first so a bad record leaves the old ones
        replacement: dict[str, RawRecord] = {}
        for record in records:
            record_id = record.get("id")
            if not record_id:
                raise ValidationError("Record has no id")
            replacement[record_id] = copy.deepcopy(dict(record))
        self._collections[resolve_collection(collection)] = replacement

    async def upsert(self, collection: Collection | str, record: Mapping[str, Any]) -> None:
        record_id = record.get("id")
        if not record_id:
            raise ValidationError("Record has no id")
        self._get(collection)[record_id] = copy.deepcopy(dict(record))

    async def delete(self, collection: Collection | str, record_id: str) -> bool:
        return self._get(collection).pop(record_id, None) is not None

    async def close(self) -> None:
        logger.debug("In-memory store closed")
