from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from src.application.errors import ConflictError
from src.application.interfaces.record_store import Collection, RecordStore

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT")


class CollectionRepository(Generic[EntityT]):
    """Whole-collection accessor: read everything, or replace everything."""

    collection: Collection
    entity_type: Callable[..., EntityT]
    normalize: Callable[[Mapping[str, Any]], dict[str, Any]]

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def _to_domain(self, record: Mapping[str, Any]) -> EntityT:
        return self.entity_type(**type(self).normalize(record))

    def _to_record(self, entity: EntityT) -> dict[str, Any]:
        return type(self).normalize(asdict(entity))

    async def get_all(self) -> list[EntityT]:
        raw = await self.store.read_all(self.collection)
        return [self._to_domain(record) for record in raw]

    async def save_all(self, entities: Sequence[EntityT]) -> None:
        records = [self._to_record(entity) for entity in entities]
        duplicates = [key for key, n in Counter(r["id"] for r in records).items() if n > 1]
        if duplicates:
            raise ConflictError(
                f"Duplicate ids in {self.collection.value}",
                details={"ids": sorted(duplicates)},
            )
        await self.store.replace_all(self.collection, records)
        logger.debug("Saved %d %s", len(records), self.collection.value)
