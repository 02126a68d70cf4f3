"""Exception hierarchy for the credential store."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base class for every failure surfaced by the connection store."""


class KeyMissing(StoreError):
    """Raised when the cipher key environment variable is unset or empty."""


class InvalidKeyLength(StoreError):
    """Raised in strict mode when the cipher key is not exactly 32 bytes."""


class AuthenticationFailure(StoreError):
    """Raised when a sealed password fails to decode or verify."""


class NotFound(StoreError):
    """Raised when a profile (or the current connection) does not exist."""


class DanglingCurrentPointer(NotFound):
    """Raised when `current` resolves to a profile that no longer exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"current connection points to missing profile '{name}'")
        self.name = name


class MalformedRecord(StoreError):
    """Raised when a profile file cannot be decoded."""


class DirectoryCreateFailed(StoreError):
    """Raised when the store directory cannot be created."""


class StoreIOError(StoreError):
    """Catch-all for filesystem failures inside the store directory."""


class InvalidProfileName(StoreError, ValueError):
    """Raised for names that cannot be stored as a profile file."""


__all__ = [
    "AuthenticationFailure",
    "DanglingCurrentPointer",
    "DirectoryCreateFailed",
    "InvalidKeyLength",
    "InvalidProfileName",
    "KeyMissing",
    "MalformedRecord",
    "NotFound",
    "StoreError",
    "StoreIOError",
]
