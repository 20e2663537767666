from textvault.documents.models import StoredDocument
from textvault.documents.results import Failed, NotFound, Stored
from textvault.documents.service import DocumentService
from textvault.documents.store import DocumentStore, InMemoryDocumentStore, MongoDocumentStore

__all__ = [
    "DocumentService",
    "DocumentStore",
    "Failed",
    "InMemoryDocumentStore",
    "MongoDocumentStore",
    "NotFound",
    "Stored",
    "StoredDocument",
]
