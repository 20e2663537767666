from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from pymongo.errors import PyMongoError

from textvault.core.errors import BadRequestError, NotFoundError, ServerError
from textvault.core.logging import get_logger
from textvault.core.response import http_error_handler, ok
from textvault.documents.models import DocumentIn
from textvault.documents.results import Failed, NotFound, Stored
from textvault.documents.service import DocumentService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/documents", tags=["Documents"])

_ERROR_RESPONSES = {
    400: {"description": "Missing textId or data", "content": {"application/json": {"example": {"error": "textId is required"}}}},
    500: {
        "description": "Storage or decryption failure",
        "content": {"application/json": {"example": {"error": "Internal server error", "message": "Failed to decrypt data"}}},
    },
}


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.document_service


def _render(result, message: str | None = None):
    if isinstance(result, Stored):
        return ok(result.document.to_public(), message=message)
    if isinstance(result, NotFound):
        raise NotFoundError("Document not found")
    if isinstance(result, Failed):
        logger.error("document_unreadable", extra={"reason": result.reason})
        raise ServerError(result.message)
    raise TypeError(f"unexpected result {type(result).__name__}")


# PUBLIC_INTERFACE
async def body_validation_error_handler(request: Request, exc: RequestValidationError):
    """Answer unparseable save bodies with the same 400s as missing fields; other routes keep the default 422."""
    if request.method != "POST" or request.url.path.rstrip("/") != router.prefix:
        return await request_validation_exception_handler(request, exc)
    fields = {str(part) for err in exc.errors() for part in err.get("loc", ())}
    if "data" in fields and "textId" not in fields:
        return await http_error_handler(request, BadRequestError("data field is required"))
    return await http_error_handler(request, BadRequestError("textId is required"))


# PUBLIC_INTERFACE
@router.post(
    "",
    summary="Save document",
    description="Encrypt `data` with a key derived from `textId` and upsert it. Returns the stored document decrypted.",
    responses=_ERROR_RESPONSES,
)
def save_document(
    body: Optional[DocumentIn] = Body(default=None),
    service: DocumentService = Depends(get_document_service),
):
    """Create or replace the document stored under ``textId``."""
    if body is None or not body.textId:
        raise BadRequestError("textId is required")
    if body.data is None:
        raise BadRequestError("data field is required")

    try:
        result = service.store(body.textId, body.data)
    except PyMongoError as exc:
        logger.exception("Error saving document")
        raise ServerError(str(exc)) from exc
    return _render(result, message="Document saved successfully")


# PUBLIC_INTERFACE
@router.get(
    "/{text_id}",
    summary="Get document",
    description="Fetch and decrypt the document stored under `text_id`.",
    responses={404: {"description": "No document for this textId"}, 500: _ERROR_RESPONSES[500]},
)
def get_document(text_id: str, service: DocumentService = Depends(get_document_service)):
    """Return the decrypted document or 404 when nothing is stored under ``text_id``."""
    try:
        result = service.retrieve(text_id)
    except PyMongoError as exc:
        logger.exception("Error retrieving document")
        raise ServerError(str(exc)) from exc
    return _render(result)
