from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol, Sequence

from src.application.errors import ValidationError

RawRecord = dict[str, Any]


class Collection(str, Enum):
    ANIMALS = "animals"
    TRANSACTIONS = "transactions"
    HEALTH_RECORDS = "health_records"


class RecordStore(Protocol):
    """Durable keyed storage for the three record collections.

    Records are plain dicts keyed by storage column name. `replace_all` is
    all-or-nothing: on failure the previous contents stay readable.
    """

    async def initialize(self) -> None: ...

    async def read_all(self, collection: Collection) -> list[RawRecord]: ...

    async def replace_all(
        self, collection: Collection, records: Sequence[Mapping[str, Any]]
    ) -> None: ...

    async def upsert(self, collection: Collection, record: Mapping[str, Any]) -> None: ...

    async def delete(self, collection: Collection, record_id: str) -> bool: ...

    async def close(self) -> None: ...


def resolve_collection(collection: Collection | str) -> Collection:
    try:
        return Collection(collection)
    except ValueError as exc:
        raise ValidationError(f"Unknown collection: {collection}") from exc
