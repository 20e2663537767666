from __future__ import annotations

import hashlib


class KeyDeriver:
    """Derive the per-document AES-256 key from an identifier and the server secret."""

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8")

    def __repr__(self) -> str:
        return "KeyDeriver(secret=***)"

    # PUBLIC_INTERFACE
    def derive(self, identifier: str) -> bytes:
        """Return SHA-256(identifier || secret) as a 32-byte key."""
        return hashlib.sha256(identifier.encode("utf-8") + self._secret).digest()
