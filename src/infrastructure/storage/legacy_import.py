from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from src.application.errors import ValidationError
from src.application.interfaces.record_store import Collection, RecordStore
from src.infrastructure.repos.records import (
    normalize_animal,
    normalize_health_record,
    normalize_transaction,
)

logger = logging.getLogger(__name__)

# One flat JSON array per collection, as the old browser app kept them
LEGACY_BLOBS: dict[str, tuple[Collection, Callable[[Mapping[str, Any]], dict[str, Any]]]] = {
    "kayanet_farm_sheep.json": (Collection.ANIMALS, normalize_animal),
    "kayanet_farm_transactions.json": (Collection.TRANSACTIONS, normalize_transaction),
    "kayanet_farm_health.json": (Collection.HEALTH_RECORDS, normalize_health_record),
}


@dataclass(slots=True)
class LegacyImportResult:
    imported: dict[str, int] = field(default_factory=dict)
    removed_files: list[Path] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)


def _load_blob(path: Path) -> list[Mapping[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Legacy file {path.name} is not valid JSON") from exc
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValidationError(f"Legacy file {path.name} must hold a JSON array of objects")
    return data


async def import_legacy_blobs(
    store: RecordStore, directory: Path, *, skip_invalid: bool = False
) -> LegacyImportResult:
    """Upsert legacy JSON blobs into the store, then delete each imported file.

    Every record of a blob is normalized before anything is written, so a bad
    blob stays on disk for inspection. It raises, or with `skip_invalid` is
    logged and left behind while the other blobs are imported.
    """
    result = LegacyImportResult()
    if not directory.is_dir():
        return result

    for filename, (collection, normalize) in LEGACY_BLOBS.items():
        path = directory / filename
        if not path.is_file():
            continue
        try:
            records = [normalize(item) for item in _load_blob(path)]
        except ValidationError as exc:
            if not skip_invalid:
                raise
            logger.error("Legacy file %s left in place: %s", path, exc.message)
            result.skipped_files.append(path)
            continue
        for record in records:
            await store.upsert(collection, record)
        path.unlink()
        result.imported[collection.value] = len(records)
        result.removed_files.append(path)
        logger.info("Imported %d %s from %s", len(records), collection.value, path)
    return result
