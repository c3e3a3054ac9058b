from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text

from src.application.errors import StorageError
from src.domain.models.animal import Animal
from src.domain.models.health_record import HealthRecord
from src.domain.models.transaction import Transaction
from src.infrastructure.db.session import FarmUnitOfWork
from src.infrastructure.repos.animals_repository import AnimalsRecordRepository
from src.infrastructure.repos.health_records_repository import HealthRecordsRecordRepository
from src.infrastructure.repos.records import normalize_animal, normalize_transaction
from src.infrastructure.repos.transactions_repository import TransactionsRecordRepository
from src.infrastructure.storage.sqlalchemy_store import SQLAlchemyRecordStore
from src.application.use_cases.animals import create_animal, list_animals
from src.application.use_cases.transactions import record_transaction


def _animal(animal_id: str, **extra):
    return normalize_animal({"id": animal_id, "gender": "Ewe", **extra})


@pytest.mark.asyncio
async def test_replace_and_read_round_trip(sqlite_store):
    records = [_animal("S1", purchaseCost="99.50"), _animal("S2", birthDate="2021-03-04")]
    await sqlite_store.replace_all("animals", records)
    stored = {r["id"]: normalize_animal(r) for r in await sqlite_store.read_all("animals")}
    assert stored["S1"]["purchase_cost"] == Decimal("99.50")
    assert stored["S2"]["birth_date"] == date(2021, 3, 4)
    assert stored["S2"]["status"] == "active"


@pytest.mark.asyncio
async def test_failed_replace_keeps_previous_contents(sqlite_store):
    await sqlite_store.replace_all("animals", [_animal("S1")])
    with pytest.raises(StorageError):
        await sqlite_store.replace_all("animals", [_animal("S2"), _animal("S2")])
    assert [r["id"] for r in await sqlite_store.read_all("animals")] == ["S1"]


@pytest.mark.asyncio
async def test_upsert_and_delete(sqlite_store):
    await sqlite_store.upsert("animals", _animal("S1", notes="a"))
    await sqlite_store.upsert("animals", _animal("S1", notes="b"))
    [row] = await sqlite_store.read_all("animals")
    assert row["notes"] == "b"
    assert await sqlite_store.delete("animals", "S1") is True
    assert await sqlite_store.delete("animals", "S1") is False


@pytest.mark.asyncio
async def test_initialize_is_idempotent(sqlite_store):
    await sqlite_store.replace_all("animals", [_animal("S1")])
    await sqlite_store.initialize()
    await sqlite_store.initialize()
    assert len(await sqlite_store.read_all("animals")) == 1


@pytest.mark.asyncio
async def test_use_cases_persist_across_reopen(test_settings, gate):
    store = SQLAlchemyRecordStore(test_settings.database_url)
    await store.initialize()
    async with FarmUnitOfWork(store, gate) as uow:
        await create_animal.execute(
            uow, create_animal.CreateAnimalInput(id="S1", gender="Ewe", purchase_cost="40")
        )
    async with FarmUnitOfWork(store, gate) as uow:
        await record_transaction.execute(
            uow,
            record_transaction.RecordTransactionInput(
                type="sale", amount="55", date="2024-02-02", description="sold", sheep_id="S1"
            ),
        )
    await store.close()

    reopened = SQLAlchemyRecordStore(test_settings.database_url)
    await reopened.initialize()
    async with FarmUnitOfWork(reopened, gate) as uow:
        [animal] = await list_animals.execute(uow)
        [sale] = await uow.transactions.get_all()
    await reopened.close()

    assert animal.status == "sold"
    assert sale.sheep_id == "S1"
    assert sale.amount == Decimal("55")


@pytest.mark.asyncio
async def test_old_animals_table_gains_new_columns(test_settings):
    store = SQLAlchemyRecordStore(test_settings.database_url)
    async with store.engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE animals (id VARCHAR(128) PRIMARY KEY, gender VARCHAR(16) NOT NULL, "
                "birth_date DATE, purchase_cost NUMERIC(12, 2), notes TEXT, "
                "status VARCHAR(16), date_added DATE)"
            )
        )
        await conn.execute(
            text(
                "INSERT INTO animals (id, gender, purchase_cost, status, date_added) "
                "VALUES ('OLD1', 'Ram', 120, 'active', '2022-05-05')"
            )
        )

    await store.initialize()
    [row] = await store.read_all("animals")
    await store.close()

    assert row["animal_type"] == "sheep"
    assert row["addition_type"] == "purchase"
    assert normalize_animal(row)["date_added"] == date(2022, 5, 5)


@pytest.mark.asyncio
async def test_legacy_sheep_table_is_folded_into_animals(test_settings):
    store = SQLAlchemyRecordStore(test_settings.database_url)
    async with store.engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE sheep (id VARCHAR(128) PRIMARY KEY, gender VARCHAR(16) NOT NULL, "
                "birth_date DATE, purchase_cost NUMERIC(12, 2), notes TEXT, status VARCHAR(16))"
            )
        )
        await conn.execute(
            text(
                "INSERT INTO sheep (id, gender, purchase_cost, notes, status) VALUES "
                "('SH1', 'Ewe', 80, NULL, 'sold'), ('SH2', 'Lamb', NULL, 'twin', NULL)"
            )
        )

    await store.initialize()
    rows = {r["id"]: normalize_animal(r) for r in await store.read_all("animals")}
    async with store.engine.connect() as conn:
        tables = await conn.execute(
            text("SELECT name FROM sqlite_master WHERE type='table' AND name='sheep'")
        )
        leftover = tables.all()
    await store.close()

    assert set(rows) == {"SH1", "SH2"}
    assert rows["SH1"]["status"] == "sold"
    assert rows["SH1"]["animal_type"] == "sheep"
    assert rows["SH2"]["purchase_cost"] == Decimal("0")
    assert rows["SH2"]["status"] == "active"
    assert rows["SH2"]["notes"] == "twin"
    assert leftover == []


@pytest.mark.asyncio
async def test_transactions_keep_optional_animal(sqlite_store):
    record = normalize_transaction(
        {"id": "1", "type": "expense", "amount": "7.25", "date": "2024-01-01",
         "description": "salt lick"}
    )
    await sqlite_store.replace_all("transactions", [record])
    [row] = await sqlite_store.read_all("transactions")
    assert normalize_transaction(row) == record


async def _save_and_load(store):
    animals = AnimalsRecordRepository(store)
    transactions = TransactionsRecordRepository(store)
    health = HealthRecordsRecordRepository(store)
    await animals.save_all(
        [
            Animal(id="S1", gender="Ewe", purchase_cost=Decimal("12.50"), notes="tag lost",
                   date_added=date(2024, 1, 2)),
            Animal(id="G1", gender="Buck", animal_type="goat", status="sold",
                   birth_date=date(2022, 8, 9), purchase_cost=Decimal("7.005"),
                   date_added=date(2024, 1, 3)),
        ]
    )
    await transactions.save_all(
        [
            Transaction(id="1", type="sale", amount=Decimal("10.125"), date=date(2024, 1, 4),
                        description="goat", sheep_id="G1", date_added=date(2024, 1, 4)),
            Transaction(id="2", type="expense", amount=Decimal("3"), date=date(2024, 1, 5),
                        description="salt", date_added=date(2024, 1, 5)),
        ]
    )
    await health.save_all(
        [
            HealthRecord(id="3", sheep_id="S1", type="weight", date=date(2024, 1, 6),
                         weight=Decimal("42.375"), date_added=date(2024, 1, 6)),
        ]
    )

    def by_id(items):
        return sorted(items, key=lambda item: item.id)

    return (
        by_id(await animals.get_all()),
        by_id(await transactions.get_all()),
        by_id(await health.get_all()),
    )


@pytest.mark.asyncio
async def test_save_all_then_get_all_matches_on_every_backend(memory_store, sqlite_store):
    from_memory = await _save_and_load(memory_store)
    from_sqlite = await _save_and_load(sqlite_store)

    assert from_memory == from_sqlite
    animals, transactions, health = from_sqlite
    assert [a.purchase_cost for a in animals] == [Decimal("7.01"), Decimal("12.50")]
    assert transactions[0].amount == Decimal("10.13")
    assert health[0].weight == Decimal("42.38")
    assert animals[0].status == "sold"
