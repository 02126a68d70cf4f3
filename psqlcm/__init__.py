"""Encrypted store for PostgreSQL connection profiles."""

from __future__ import annotations

from .config import StoreConfig
from .errors import (
    AuthenticationFailure,
    DanglingCurrentPointer,
    DirectoryCreateFailed,
    InvalidKeyLength,
    InvalidProfileName,
    KeyMissing,
    MalformedRecord,
    NotFound,
    StoreError,
    StoreIOError,
)
from .manager import ConnectionStore
from .models import ConnectionProfile, ProfileEntry, SSLMode

__version__ = "0.1.0"

__all__ = [
    "AuthenticationFailure",
    "ConnectionProfile",
    "ConnectionStore",
    "DanglingCurrentPointer",
    "DirectoryCreateFailed",
    "InvalidKeyLength",
    "InvalidProfileName",
    "KeyMissing",
    "MalformedRecord",
    "NotFound",
    "ProfileEntry",
    "SSLMode",
    "StoreConfig",
    "StoreError",
    "StoreIOError",
    "__version__",
]
