"""Per-document key derivation and the AES-256-CBC envelope codec."""

from textvault.crypto.cipher_codec import CipherCodec
from textvault.crypto.errors import DecryptionError, DecryptionFailed, FormatError
from textvault.crypto.key_deriver import KeyDeriver

__all__ = ["CipherCodec", "DecryptionError", "DecryptionFailed", "FormatError", "KeyDeriver"]
