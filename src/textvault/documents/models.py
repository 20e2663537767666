from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoredDocument(BaseModel):
    """A persisted text document. ``data`` holds the envelope in storage and plaintext once decrypted."""

    model_config = ConfigDict(populate_by_name=True)

    text_id: str = Field(..., alias="textId", description="Caller-supplied document identifier")
    data: str = Field(default="", description="Ciphertext envelope, or decrypted text in responses")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    # PUBLIC_INTERFACE
    @classmethod
    def from_mongo(cls, doc: Dict[str, Any]) -> "StoredDocument":
        """Build from a raw MongoDB document (drops ``_id``)."""
        return cls(
            textId=doc["textId"],
            data=doc.get("data") or "",
            createdAt=doc["createdAt"],
            updatedAt=doc["updatedAt"],
        )

    # PUBLIC_INTERFACE
    def to_public(self) -> Dict[str, Any]:
        """JSON-ready dict with the camelCase field names used on the wire."""
        return self.model_dump(by_alias=True, mode="json")


class DocumentIn(BaseModel):
    """Request body for saving a document. Presence checks happen in the route."""

    textId: Optional[str] = Field(default=None, description="Document identifier", examples=["doc1"])
    data: Optional[str] = Field(default=None, description="Plain text to store; empty string is allowed", examples=["hello world"])

    @field_validator("textId", mode="before")
    @classmethod
    def _numeric_text_id(cls, value: Any) -> Any:
        # Clients may send numeric ids; key derivation uses their decimal text
        if isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value
