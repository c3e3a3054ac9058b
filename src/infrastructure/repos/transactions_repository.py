from __future__ import annotations

from src.application.interfaces.record_store import Collection
from src.application.interfaces.repositories.transactions import TransactionRepository
from src.domain.models.transaction import Transaction
from src.infrastructure.repos.collection_repository import CollectionRepository
from src.infrastructure.repos.records import normalize_transaction


class TransactionsRecordRepository(CollectionRepository[Transaction], TransactionRepository):
    collection = Collection.TRANSACTIONS
    entity_type = Transaction
    normalize = staticmethod(normalize_transaction)
