from __future__ import annotations

from textvault.core.logging import get_logger
from textvault.crypto import CipherCodec, DecryptionFailed
from textvault.documents.models import StoredDocument
from textvault.documents.results import Failed, NotFound, RetrieveResult, Stored, StoreResult
from textvault.documents.store import DocumentStore

logger = get_logger(__name__)


class DocumentService:
    """Encrypts documents on the way into the store and decrypts them on the way out.

    Storage errors propagate as exceptions; decryption problems are returned
    as :class:`Failed` so callers can tell them apart from a missing document.
    """

    def __init__(self, codec: CipherCodec, store: DocumentStore):
        self._codec = codec
        self._store = store

    # PUBLIC_INTERFACE
    def store(self, text_id: str, plaintext: str) -> StoreResult:
        """Encrypt and upsert ``plaintext`` under ``text_id``.

        The persisted record is decrypted again before returning, so a
        successful result proves the stored envelope is readable.
        """
        envelope = self._codec.encrypt(plaintext, text_id)
        record = self._store.upsert(text_id, envelope)
        logger.info("document_saved", extra={"text_id": text_id})
        return self._open(record)

    # PUBLIC_INTERFACE
    def retrieve(self, text_id: str) -> RetrieveResult:
        """Load and decrypt the document stored under ``text_id``."""
        record = self._store.find(text_id)
        if record is None:
            logger.info("document_not_found", extra={"text_id": text_id})
            return NotFound(text_id=text_id)
        return self._open(record)

    def _open(self, record: StoredDocument):
        try:
            plaintext = self._codec.decrypt(record.data, record.text_id)
        except DecryptionFailed as exc:
            return Failed(reason=exc.reason, message=str(exc))
        return Stored(document=record.model_copy(update={"data": plaintext}))
