from __future__ import annotations

import binascii
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from textvault.core.logging import get_logger
from textvault.crypto.errors import DecryptionError, FormatError
from textvault.crypto.key_deriver import KeyDeriver

logger = get_logger(__name__)

IV_LENGTH = 16
DELIMITER = ":"
_BLOCK_BITS = algorithms.AES.block_size


class CipherCodec:
    """AES-256-CBC codec producing ``hex(iv):hex(ciphertext)`` envelopes.

    Keys are derived per call from the document identifier, so one codec
    instance serves every document and holds no per-call state.
    """

    def __init__(self, key_deriver: KeyDeriver):
        self._key_deriver = key_deriver

    # PUBLIC_INTERFACE
    def encrypt(self, plaintext: str, identifier: str) -> str:
        """Encrypt plaintext for the given identifier. Empty input yields an empty string."""
        if not plaintext:
            return ""

        key = self._key_deriver.derive(identifier)
        iv = os.urandom(IV_LENGTH)

        padder = padding.PKCS7(_BLOCK_BITS).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return iv.hex() + DELIMITER + ciphertext.hex()

    # PUBLIC_INTERFACE
    def decrypt(self, envelope: str, identifier: str) -> str:
        """Decrypt an envelope produced by :meth:`encrypt` for the same identifier.

        Raises:
            FormatError: the envelope is not two hex fields or the IV is not 16 bytes.
            DecryptionError: the cipher, padding or UTF-8 decoding rejected the payload.
        """
        if not envelope:
            return ""

        try:
            iv, ciphertext = self._split(envelope)
        except FormatError as exc:
            logger.warning("decryption_failed", extra={"text_id": identifier, "reason": exc.reason, "detail": exc.detail})
            raise

        key = self._key_deriver.derive(identifier)
        try:
            decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
            raw = unpadder.update(padded) + unpadder.finalize()
            return raw.decode("utf-8")
        except ValueError as exc:
            # UnicodeDecodeError is a ValueError; so are length and padding rejections
            err = DecryptionError(type(exc).__name__)
            logger.warning("decryption_failed", extra={"text_id": identifier, "reason": err.reason, "detail": err.detail})
            raise err from exc

    @staticmethod
    def _split(envelope: str) -> tuple[bytes, bytes]:
        parts = envelope.split(DELIMITER)
        if len(parts) != 2:
            raise FormatError(f"expected 2 fields, got {len(parts)}")
        iv_hex, payload_hex = parts
        try:
            iv = binascii.unhexlify(iv_hex)
            ciphertext = binascii.unhexlify(payload_hex)
        except ValueError as exc:
            raise FormatError("field is not valid hex") from exc
        if len(iv) != IV_LENGTH:
            raise FormatError(f"iv must be {IV_LENGTH} bytes, got {len(iv)}")
        return iv, ciphertext
