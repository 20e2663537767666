from __future__ import annotations

GENERIC_MESSAGE = "Failed to decrypt data"


class DecryptionFailed(Exception):
    """A stored envelope could not be turned back into plaintext.

    The message is always the generic one; ``reason`` keeps the internal
    category (``"format"`` or ``"cipher"``) for logs and diagnostics.
    """

    reason = "unknown"

    def __init__(self, detail: str = ""):
        super().__init__(GENERIC_MESSAGE)
        self.detail = detail


class FormatError(DecryptionFailed):
    """Envelope is not ``<hex iv>:<hex ciphertext>`` or the IV is not 16 bytes."""

    reason = "format"


class DecryptionError(DecryptionFailed):
    """Cipher or padding rejected the input, usually a key derived from the wrong identifier."""

    reason = "cipher"
