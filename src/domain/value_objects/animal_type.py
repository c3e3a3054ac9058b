from __future__ import annotations

from enum import Enum


class AnimalType(str, Enum):
    SHEEP = "sheep"
    GOAT = "goat"

    def genders(self) -> frozenset[str]:
        return _GENDERS[self]

    def allows_gender(self, gender: str) -> bool:
        return gender in _GENDERS[self]


_GENDERS: dict[AnimalType, frozenset[str]] = {
    AnimalType.SHEEP: frozenset({"Ewe", "Ram", "Lamb", "Wether"}),
    AnimalType.GOAT: frozenset({"Doe", "Buck", "Kid", "Wether"}),
}


class AdditionType(str, Enum):
    PURCHASE = "purchase"
    BIRTH = "birth"
