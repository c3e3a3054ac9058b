from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

os.environ.setdefault("FARM_DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("FARM_ALLOW_MEMORY_FALLBACK", "false")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.application.use_cases.animals import create_animal
from src.config.settings import Settings
from src.infrastructure.db.session import FarmUnitOfWork, MutationGate
from src.infrastructure.storage.memory_store import InMemoryRecordStore
from src.infrastructure.storage.sqlalchemy_store import SQLAlchemyRecordStore


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        log_level="INFO",
        environment="test",
        allow_memory_fallback=False,
    )


@pytest.fixture()
async def memory_store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    await store.initialize()
    return store


@pytest.fixture()
async def sqlite_store(test_settings: Settings) -> AsyncIterator[SQLAlchemyRecordStore]:
    store = SQLAlchemyRecordStore(test_settings.database_url)
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture()
def gate() -> MutationGate:
    gate = MutationGate()
    gate.mark_ready()
    return gate


@pytest.fixture()
def make_uow(memory_store: InMemoryRecordStore, gate: MutationGate):
    def factory() -> FarmUnitOfWork:
        return FarmUnitOfWork(memory_store, gate)

    return factory


@pytest.fixture()
def add_animal(make_uow):
    async def add(animal_id: str, *, animal_type: str = "sheep", gender: str = "Ewe", **extra):
        async with make_uow() as uow:
            return await create_animal.execute(
                uow,
                create_animal.CreateAnimalInput(
                    id=animal_id, animal_type=animal_type, gender=gender, **extra
                ),
            )

    return add
