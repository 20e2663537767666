from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException


# PUBLIC_INTERFACE
def ok(document: Dict[str, Any], message: Optional[str] = None) -> Dict[str, Any]:
    """Produce a standardized success payload.

    - success: always true
    - message: optional human-readable note (set on writes)
    - document: the serialized document with decrypted data
    """
    payload: Dict[str, Any] = {"success": True}
    if message is not None:
        payload["message"] = message
    payload["document"] = document
    return payload


# PUBLIC_INTERFACE
def error_payload(error: str, message: Optional[str] = None) -> Dict[str, Any]:
    """Produce a standardized error payload.

    - error: short description of what went wrong
    - message: optional detail (never contains secrets or plaintext)
    """
    payload: Dict[str, Any] = {"error": error}
    if message is not None:
        payload["message"] = message
    return payload


# PUBLIC_INTERFACE
async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render dict details as the response body instead of nesting them under "detail"."""
    if isinstance(exc.detail, dict):
        content: Any = exc.detail
    else:
        content = error_payload(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))
