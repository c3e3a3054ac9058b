from __future__ import annotations

from src.application.interfaces.record_store import Collection
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal
from src.infrastructure.repos.collection_repository import CollectionRepository
from src.infrastructure.repos.records import normalize_animal


class AnimalsRecordRepository(CollectionRepository[Animal], AnimalRepository):
    collection = Collection.ANIMALS
    entity_type = Animal
    normalize = staticmethod(normalize_animal)
