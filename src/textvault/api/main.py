from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from textvault.core.db import create_mongo_client, documents_collection
from textvault.core.logging import get_logger
from textvault.core.observability import RequestContextMiddleware
from textvault.core.response import http_error_handler
from textvault.core.settings import Settings, get_settings
from textvault.crypto import CipherCodec, KeyDeriver
from textvault.documents.router import body_validation_error_handler, router as documents_router
from textvault.documents.service import DocumentService
from textvault.documents.store import DocumentStore, MongoDocumentStore

logger = get_logger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Liveness"},
    {"name": "Documents", "description": "Encrypted text documents keyed by textId"},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """Create and configure the FastAPI app.

    Without an explicit ``store`` a MongoDB-backed one is built from
    ``settings``; its client is closed when the app shuts down.
    Raises ConfigurationError when SECRET_KEY or CLIENT_URL is missing.
    """
    settings = (settings or get_settings()).validate_required()

    mongo_client = None
    if store is None:
        mongo_client = create_mongo_client(settings.mongo)
        store = MongoDocumentStore(documents_collection(mongo_client, settings.mongo))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup", extra={"env": settings.api.ENV, "version": settings.api.API_VERSION})
        if isinstance(store, MongoDocumentStore):
            try:
                store.ensure_indexes()
                logger.info("Connected to MongoDB")
            except PyMongoError as exc:
                # Requests will surface storage errors individually
                logger.error("MongoDB connection error", extra={"error": str(exc)})
        yield
        if mongo_client is not None:
            mongo_client.close()

    app = FastAPI(
        title=settings.api.API_TITLE,
        description=settings.api.API_DESCRIPTION,
        version=settings.api.API_VERSION,
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    codec = CipherCodec(KeyDeriver(settings.security.SECRET_KEY))
    app.state.document_service = DocumentService(codec, store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.api.CLIENT_URL],
        allow_methods=settings.api.CORS_ALLOW_METHODS,
    )
    # Correlation ID / request context middleware
    app.add_middleware(RequestContextMiddleware, logger=logger)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, body_validation_error_handler)

    @app.get("/", tags=["Health"], summary="Health Check", response_class=PlainTextResponse)
    def health_check():
        """Liveness probe."""
        return "Server is running!!"

    app.include_router(documents_router)
    return app
