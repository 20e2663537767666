"""Upsert-keyed persistence for encrypted documents."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection

from textvault.core.logging import get_logger
from textvault.documents.models import StoredDocument

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStore(ABC):
    @abstractmethod
    def upsert(self, text_id: str, envelope: str) -> StoredDocument:
        """Insert or replace the envelope for ``text_id`` and return the stored record."""
        pass

    @abstractmethod
    def find(self, text_id: str) -> Optional[StoredDocument]:
        pass


class MongoDocumentStore(DocumentStore):
    """Documents in one MongoDB collection, unique on ``textId``."""

    def __init__(self, collection: Collection, clock: Callable[[], datetime] = _utcnow) -> None:
        self.collection = collection
        self._clock = clock

    # PUBLIC_INTERFACE
    def ensure_indexes(self) -> None:
        """Create the unique ``textId`` index; a no-op when it already exists."""
        self.collection.create_index([("textId", ASCENDING)], unique=True, name="textId_unique")
        logger.info("documents index ensured", extra={"collection": self.collection.name})

    def upsert(self, text_id: str, envelope: str) -> StoredDocument:
        now = self._clock()
        doc = self.collection.find_one_and_update(
            {"textId": text_id},
            {
                "$set": {"data": envelope, "updatedAt": now},
                "$setOnInsert": {"createdAt": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return StoredDocument.from_mongo(doc)

    def find(self, text_id: str) -> Optional[StoredDocument]:
        doc = self.collection.find_one({"textId": text_id})
        if not doc:
            return None
        return StoredDocument.from_mongo(doc)


class InMemoryDocumentStore(DocumentStore):
    """Process-local store for tests and local runs without MongoDB."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._rows: Dict[str, StoredDocument] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def upsert(self, text_id: str, envelope: str) -> StoredDocument:
        now = self._clock()
        with self._lock:
            existing = self._rows.get(text_id)
            created_at = existing.created_at if existing else now
            row = StoredDocument(textId=text_id, data=envelope, createdAt=created_at, updatedAt=now)
            self._rows[text_id] = row
        return row.model_copy()

    def find(self, text_id: str) -> Optional[StoredDocument]:
        with self._lock:
            row = self._rows.get(text_id)
        return row.model_copy() if row else None
