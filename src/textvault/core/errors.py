from typing import Optional

from fastapi import HTTPException, status

from textvault.core.response import error_payload


class ConfigurationError(RuntimeError):
    """Raised at start-up when required environment configuration is missing."""


class BadRequestError(HTTPException):
    def __init__(self, message: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=error_payload(message))


class NotFoundError(HTTPException):
    def __init__(self, message: str = "Document not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=error_payload(message))


class ServerError(HTTPException):
    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_payload("Internal server error", message=message or "Unknown error"),
        )
