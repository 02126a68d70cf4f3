"""Shared models for stored connection profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

CURRENT_NAME = "current"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5432
DEFAULT_DATABASE = "postgres"
DEFAULT_USER = "postgres"


class SSLMode(str, Enum):
    """libpq `sslmode` values accepted for a stored connection."""

    DISABLE = "disable"
    ALLOW = "allow"
    PREFER = "prefer"
    REQUIRE = "require"
    VERIFY_CA = "verify-ca"
    VERIFY_FULL = "verify-full"


DEFAULT_SSL_MODE = SSLMode.REQUIRE


class ConnectionProfile(BaseModel):
    """Connection parameters persisted for a single profile.

    The same shape is used on disk and in memory; only the meaning of
    `password` differs (sealed blob on disk, plaintext after a read).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535, strict=True)
    database: str = Field(min_length=1)
    user: str = Field(min_length=1)
    password: str
    ssl_mode: SSLMode = Field(alias="sslmode")

    def connection_string(self) -> str:
        """Render a libpq-compatible connection URI."""

        user = quote(self.user, safe="")
        password = quote(self.password, safe="")
        return (
            f"postgresql://{user}:{password}@{self.host}:{self.port}/{self.database}"
            f"?sslmode={self.ssl_mode.value}"
        )

    def with_password(self, password: str) -> ConnectionProfile:
        """Return a copy with the password swapped (sealed or opened)."""

        return self.model_copy(update={"password": password})

    def __repr__(self) -> str:
        return (
            f"ConnectionProfile(host={self.host!r}, port={self.port}, database={self.database!r}, "
            f"user={self.user!r}, password='***', ssl_mode={self.ssl_mode.value!r})"
        )

    __str__ = __repr__


@dataclass(frozen=True, slots=True)
class ProfileEntry:
    """Display row returned when listing the store."""

    name: str
    current: bool = False

    def __str__(self) -> str:
        return f"*{self.name}" if self.current else self.name


__all__ = [
    "CURRENT_NAME",
    "ConnectionProfile",
    "DEFAULT_DATABASE",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_SSL_MODE",
    "DEFAULT_USER",
    "ProfileEntry",
    "SSLMode",
]
