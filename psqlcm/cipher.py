"""AES-256-GCM sealing for stored passwords."""

from __future__ import annotations

import base64
import binascii
import logging
import os
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import AuthenticationFailure, InvalidKeyLength, KeyMissing

if TYPE_CHECKING:
    from .config import StoreConfig

LOG = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12


def derive_key(raw: str | None, *, strict: bool = False) -> bytes:
    """Turn the raw key material into exactly 32 bytes.

    Short keys are padded with NUL bytes and long keys are truncated, which
    silently accepts weak keys. `strict=True` rejects anything that is not
    already 32 bytes instead.
    """

    if not raw:
        raise KeyMissing("cipher key is not set")
    material = raw.encode("utf-8")
    if len(material) != KEY_SIZE:
        if strict:
            raise InvalidKeyLength(f"cipher key must be exactly {KEY_SIZE} bytes, got {len(material)}")
        LOG.warning(
            "Cipher key is not %d bytes; padding/truncating it",
            KEY_SIZE,
            extra={"key_length": len(material)},
        )
    return material[:KEY_SIZE].ljust(KEY_SIZE, b"\0")


class PasswordCipher:
    """Seals and opens passwords with a fixed 256-bit key."""

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise InvalidKeyLength(f"cipher key must be exactly {KEY_SIZE} bytes, got {len(key)}")
        self._aead = AESGCM(key)

    @classmethod
    def from_config(cls, config: StoreConfig) -> PasswordCipher:
        raw = config.cipher_key.get_secret_value() if config.cipher_key is not None else None
        return cls(derive_key(raw, strict=config.strict_key))

    def seal(self, plaintext: str) -> str:
        """Encrypt and return base64(nonce || ciphertext || tag)."""

        nonce = os.urandom(NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def open(self, blob: str) -> str:
        """Reverse `seal`; any decoding or tag failure is an AuthenticationFailure."""

        try:
            raw = base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AuthenticationFailure("sealed password is not valid base64") from exc
        if base64.b64encode(raw).decode("ascii") != blob:
            raise AuthenticationFailure("sealed password is not canonical base64")
        if len(raw) < NONCE_SIZE:
            raise AuthenticationFailure("sealed password is shorter than the nonce")
        nonce, ciphertext = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
        try:
            plaintext = self._aead.decrypt(nonce, ciphertext, None)
        except InvalidTag as exc:
            raise AuthenticationFailure("sealed password failed authentication (tampered or wrong key)") from exc
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise AuthenticationFailure("sealed password is not valid UTF-8") from exc


__all__ = ["KEY_SIZE", "NONCE_SIZE", "PasswordCipher", "derive_key"]
