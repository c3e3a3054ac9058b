from __future__ import annotations

from typing import Protocol, Sequence

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def get_all(self) -> list[Animal]: ...

    async def save_all(self, animals: Sequence[Animal]) -> None: ...
