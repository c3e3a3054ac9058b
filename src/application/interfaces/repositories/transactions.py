from __future__ import annotations

from typing import Protocol, Sequence

from src.domain.models.transaction import Transaction


class TransactionRepository(Protocol):
    async def get_all(self) -> list[Transaction]: ...

    async def save_all(self, transactions: Sequence[Transaction]) -> None: ...
