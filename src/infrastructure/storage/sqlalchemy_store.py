from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from sqlalchemy import delete, insert, inspect, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from src.application.errors import StorageError, StorageUnavailable, ValidationError
from src.application.interfaces.record_store import (
    Collection,
    RawRecord,
    RecordStore,
    resolve_collection,
)
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm.animal import AnimalORM
from src.infrastructure.db.orm.health_record import HealthRecordORM
from src.infrastructure.db.orm.transaction import TransactionORM
from src.infrastructure.db.session import create_engine

logger = logging.getLogger(__name__)

_TABLES = {
    Collection.ANIMALS: AnimalORM.__table__,
    Collection.TRANSACTIONS: TransactionORM.__table__,
    Collection.HEALTH_RECORDS: HealthRecordORM.__table__,
}

# Columns added to `animals` after the first release, with the default that
# existing rows receive
_ANIMAL_UPGRADE_COLUMNS = {
    "addition_type": "'purchase'",
    "animal_type": "'sheep'",
}

# Table used before goats were tracked; folded into `animals` on initialize
_LEGACY_SHEEP_TABLE = "sheep"


def _table_names(sync_conn) -> list[str]:
    return inspect(sync_conn).get_table_names()


def _column_names(sync_conn, table_name: str) -> set[str]:
    return {col["name"] for col in inspect(sync_conn).get_columns(table_name)}


class SQLAlchemyRecordStore(RecordStore):
    """Record store on a relational database through SQLAlchemy's async engine."""

    def __init__(self, database_url: str | None = None, *, engine: AsyncEngine | None = None):
        if engine is None and database_url is None:
            raise ValueError("database_url or engine is required")
        self._engine = engine or create_engine(database_url)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def initialize(self) -> None:
        try:
            async with self._engine.begin() as conn:
                existing = set(await conn.run_sync(_table_names))
                if AnimalORM.__tablename__ in existing:
                    await self._upgrade_animals(conn)
                await conn.run_sync(Base.metadata.create_all)
                if _LEGACY_SHEEP_TABLE in existing:
                    await self._migrate_sheep_table(conn)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Record store could not be opened: %s", exc)
            raise StorageUnavailable("Storage medium could not be opened") from exc
        logger.info("Record store initialized at %s", self._engine.url.render_as_string())

    async def _upgrade_animals(self, conn: AsyncConnection) -> None:
        columns = await conn.run_sync(_column_names, AnimalORM.__tablename__)
        for name, default in _ANIMAL_UPGRADE_COLUMNS.items():
            if name in columns:
                continue
            logger.info("Adding column animals.%s", name)
            await conn.execute(
                text(f"ALTER TABLE animals ADD COLUMN {name} VARCHAR(16) DEFAULT {default}")
            )

    async def _migrate_sheep_table(self, conn: AsyncConnection) -> None:
        columns = await conn.run_sync(_column_names, _LEGACY_SHEEP_TABLE)

        def pick(name: str, fallback: str) -> str:
            return f"COALESCE({name}, {fallback})" if name in columns else fallback

        select_list = ", ".join(
            [
                "id",
                "'sheep'",
                "gender",
                "birth_date" if "birth_date" in columns else "NULL",
                pick("purchase_cost", "0"),
                pick("notes", "''"),
                pick("status", "'active'"),
                pick("addition_type", "'purchase'"),
                pick("date_added", "CURRENT_DATE"),
            ]
        )
        result = await conn.execute(
            text(
                "INSERT INTO animals (id, animal_type, gender, birth_date, purchase_cost, "
                "notes, status, addition_type, date_added) "
                f"SELECT {select_list} FROM sheep "
                "WHERE id NOT IN (SELECT id FROM animals)"
            )
        )
        await conn.execute(text("DROP TABLE sheep"))
        logger.info("Migrated %s animals from legacy sheep table", result.rowcount)

    async def read_all(self, collection: Collection | str) -> list[RawRecord]:
        table = _TABLES[resolve_collection(collection)]
        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(select(table))
                return [dict(row._mapping) for row in result]
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read {table.name}") from exc

    async def replace_all(
        self, collection: Collection | str, records: Sequence[Mapping[str, Any]]
    ) -> None:
        table = _TABLES[resolve_collection(collection)]
        rows = [self._to_row(table, record) for record in records]
        # Clearing and writing share one transaction; any failure rolls both back
        try:
            async with self._engine.begin() as conn:
                await conn.execute(delete(table))
                if rows:
                    await conn.execute(insert(table), rows)
        except SQLAlchemyError as exc:
            logger.error("replace_all on %s failed, previous contents kept: %s", table.name, exc)
            raise StorageError(f"Failed to save {table.name}") from exc
        logger.debug("Replaced %s with %d records", table.name, len(rows))

    async def upsert(self, collection: Collection | str, record: Mapping[str, Any]) -> None:
        table = _TABLES[resolve_collection(collection)]
        row = self._to_row(table, record)
        try:
            async with self._engine.begin() as conn:
                await conn.execute(delete(table).where(table.c.id == row["id"]))
                await conn.execute(insert(table), [row])
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to upsert into {table.name}") from exc

    async def delete(self, collection: Collection | str, record_id: str) -> bool:
        table = _TABLES[resolve_collection(collection)]
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(delete(table).where(table.c.id == record_id))
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to delete from {table.name}") from exc
        return result.rowcount > 0

    async def close(self) -> None:
        await self._engine.dispose()

    @staticmethod
    def _to_row(table, record: Mapping[str, Any]) -> dict[str, Any]:
        if not record.get("id"):
            raise ValidationError(f"Record for {table.name} has no id")
        return {name: record.get(name) for name in table.columns.keys() if name in record}
