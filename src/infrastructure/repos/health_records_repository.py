from __future__ import annotations

from src.application.interfaces.record_store import Collection
from src.application.interfaces.repositories.health_records import HealthRecordRepository
from src.domain.models.health_record import HealthRecord
from src.infrastructure.repos.collection_repository import CollectionRepository
from src.infrastructure.repos.records import normalize_health_record


class HealthRecordsRecordRepository(CollectionRepository[HealthRecord], HealthRecordRepository):
    collection = Collection.HEALTH_RECORDS
    entity_type = HealthRecord
    normalize = staticmethod(normalize_health_record)
