"""Live connectivity check run before a new connection is saved."""

from __future__ import annotations

import asyncio
import time

import asyncpg

from .models import ConnectionProfile


class ConnectivityError(RuntimeError):
    """Raised when the database cannot be reached with the given profile."""


async def check_connection(profile: ConnectionProfile, *, timeout: float = 5.0) -> int:
    """Connect, run `SELECT 1`, and return the round trip in milliseconds."""

    started = time.perf_counter()
    try:
        conn = await asyncpg.connect(**_connect_kwargs(profile, timeout))
    except Exception as exc:
        raise ConnectivityError(f"error opening connection to {profile.host}:{profile.port}: {exc}") from exc
    try:
        await conn.fetchval("SELECT 1")
    except Exception as exc:
        raise ConnectivityError(f"error pinging database '{profile.database}': {exc}") from exc
    finally:
        try:
            await conn.close()
        except Exception:  # pragma: no cover - best effort cleanup
            pass
    return int((time.perf_counter() - started) * 1000)


def ping(profile: ConnectionProfile, *, timeout: float = 5.0) -> int:
    """Synchronous wrapper around `check_connection` for the command line."""

    return asyncio.run(check_connection(profile, timeout=timeout))


def _connect_kwargs(profile: ConnectionProfile, timeout: float) -> dict[str, object]:
    return {
        "host": profile.host,
        "port": profile.port,
        "user": profile.user,
        "password": profile.password,
        "database": profile.database,
        "ssl": profile.ssl_mode.value,
        "timeout": timeout,
    }


__all__ = ["ConnectivityError", "check_connection", "ping"]
