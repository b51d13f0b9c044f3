from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

ENVELOPE_DELIMITER = "."
NONCE_SIZE = 12  # 96-bit GCM nonce
KEY_SIZE = 32  # AES-256


class EncryptionError(Exception):
    """Field encryption or decryption failed."""


class EncryptionConfigError(EncryptionError):
    """The encryption key is missing or unusable."""


class EnvelopeFormatError(EncryptionError):
    """An encrypted envelope could not be parsed."""


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def derive_key(secret: str, salt: bytes, iterations: int = 600_000) -> bytes:
    """Derive a 32-byte AES-256 key from a configured secret string.

    Uses PBKDF2-HMAC-SHA256 so that a passphrase-style ``ENCRYPTION_KEY``
    still yields a full-strength key.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(secret.encode("utf-8"))


def encrypt(plaintext: str, key: bytes) -> tuple[bytes, bytes]:
    """AES-256-GCM encrypt *plaintext* with *key*.

    Returns ``(ciphertext, nonce)`` where *nonce* is a random 12-byte value
    and *ciphertext* ends with the 16-byte authentication tag.
    """
    aesgcm = AESGCM(key)
    nonce = os.urandom(NONCE_SIZE)
    ciphertext = aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
    return ciphertext, nonce


def decrypt(ciphertext: bytes, key: bytes, nonce: bytes) -> str:
    """AES-256-GCM decrypt *ciphertext* with *key* and *nonce*."""
    aesgcm = AESGCM(key)
    plaintext_bytes = aesgcm.decrypt(nonce, ciphertext, None)
    return plaintext_bytes.decode("utf-8")


# ---------------------------------------------------------------------------
# Envelope codec
# ---------------------------------------------------------------------------


def pack_envelope(ciphertext: bytes, nonce: bytes) -> str:
    """Encode ``<ciphertext_b64>.<nonce_b64>``."""
    return (
        base64.b64encode(ciphertext).decode("ascii")
        + ENVELOPE_DELIMITER
        + base64.b64encode(nonce).decode("ascii")
    )


def split_envelope(envelope: str) -> tuple[bytes, bytes]:
    """Decode an envelope back into ``(ciphertext, nonce)``."""
    parts = envelope.split(ENVELOPE_DELIMITER)
    if len(parts) != 2:
        raise EnvelopeFormatError("Envelope must contain exactly one delimiter")

    try:
        ciphertext = base64.b64decode(parts[0], validate=True)
        nonce = base64.b64decode(parts[1], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EnvelopeFormatError("Envelope is not valid base64") from exc

    if len(nonce) != NONCE_SIZE:
        raise EnvelopeFormatError(f"Nonce must be {NONCE_SIZE} bytes")
    return ciphertext, nonce


# ---------------------------------------------------------------------------
# Field encryptor
# ---------------------------------------------------------------------------


class FieldEncryptor:
    """Seals JSON payloads into transport-safe AES-256-GCM envelopes.

    The key is fixed at construction; every ``seal`` call draws a fresh
    nonce, so sealing the same payload twice gives different envelopes.

    Keys built with ``from_secret`` go through PBKDF2, not the raw UTF-8
    secret, so envelopes are not interchangeable with services that use
    the secret bytes directly as the AES key.
    """

    def __init__(self, key: bytes) -> None:
        if not isinstance(key, bytes) or len(key) != KEY_SIZE:
            raise EncryptionConfigError(f"Encryption key must be {KEY_SIZE} bytes")
        self._key = key

    @classmethod
    def from_secret(
        cls,
        secret: str,
        salt: bytes,
        iterations: int = 600_000,
    ) -> "FieldEncryptor":
        if not secret:
            raise EncryptionConfigError("No encryption key configured")
        return cls(derive_key(secret, salt, iterations))

    def __repr__(self) -> str:
        return "FieldEncryptor(key=<redacted>)"

    def seal(self, data: Any) -> str:
        """Serialize *data* compactly as JSON and encrypt it.

        NaN and Infinity are rejected rather than written as non-standard JSON.
        """
        try:
            plaintext = json.dumps(
                data, separators=(",", ":"), ensure_ascii=False, allow_nan=False
            )
        except (TypeError, ValueError) as exc:
            raise EncryptionError("Payload is not JSON-serializable") from exc

        ciphertext, nonce = encrypt(plaintext, self._key)
        return pack_envelope(ciphertext, nonce)

    def open(self, envelope: str) -> Any:
        """Decrypt an envelope produced by ``seal`` and parse the JSON."""
        ciphertext, nonce = split_envelope(envelope)
        try:
            plaintext = decrypt(ciphertext, self._key, nonce)
        except InvalidTag as exc:
            raise EncryptionError("Envelope failed authentication") from exc
        return json.loads(plaintext)
