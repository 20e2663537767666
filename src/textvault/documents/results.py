from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from textvault.documents.models import StoredDocument


@dataclass(frozen=True)
class Stored:
    """Document with ``data`` already decrypted."""

    document: StoredDocument


@dataclass(frozen=True)
class NotFound:
    text_id: str


@dataclass(frozen=True)
class Failed:
    """Decryption failed. ``reason`` is internal ("format" or "cipher"); ``message`` is safe to show."""

    reason: str
    message: str


StoreResult = Union[Stored, Failed]
RetrieveResult = Union[Stored, NotFound, Failed]
