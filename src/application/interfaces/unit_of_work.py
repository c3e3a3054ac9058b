from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.animals import AnimalRepository
from src.application.interfaces.repositories.health_records import HealthRecordRepository
from src.application.interfaces.repositories.transactions import TransactionRepository


class UnitOfWork(Protocol):
    animals: AnimalRepository
    transactions: TransactionRepository
    health_records: HealthRecordRepository

    # Entering gates on readiness and holds the mutation lock until exit
    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...
