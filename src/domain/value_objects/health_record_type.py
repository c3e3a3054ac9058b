from __future__ import annotations

from enum import Enum


class HealthRecordType(str, Enum):
    WEIGHT = "weight"
    MEDICATION = "medication"
    VACCINATION = "vaccination"
    DEATH = "death"
    OTHER = "other"
