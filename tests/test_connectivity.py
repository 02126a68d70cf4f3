"""Tests for the live connectivity check."""

from __future__ import annotations

from typing import Any

import pytest

from psqlcm.connectivity import ConnectivityError, check_connection, ping
from psqlcm.models import ConnectionProfile


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class _FakeConnection:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.closed = False
        self.queries: list[str] = []

    async def fetchval(self, sql: str) -> int:
        self.queries.append(sql)
        if self.fail:
            raise RuntimeError("server closed the connection")
        return 1

    async def close(self) -> None:
        self.closed = True


@pytest.mark.anyio
async def test_check_connection_pings_with_profile(
    monkeypatch: pytest.MonkeyPatch, profile: ConnectionProfile
) -> None:
    fake_conn = _FakeConnection()
    captured: dict[str, Any] = {}

    async def _fake_connect(**kwargs: Any) -> _FakeConnection:
        captured.update(kwargs)
        return fake_conn

    monkeypatch.setattr("psqlcm.connectivity.asyncpg.connect", _fake_connect)

    latency = await check_connection(profile, timeout=1.5)

    assert latency >= 0
    assert fake_conn.queries == ["SELECT 1"]
    assert fake_conn.closed
    assert captured == {
        "host": "localhost",
        "port": 5432,
        "user": "postgres",
        "password": "secret",
        "database": "postgres",
        "ssl": "require",
        "timeout": 1.5,
    }


@pytest.mark.anyio
async def test_check_connection_wraps_connect_errors(
    monkeypatch: pytest.MonkeyPatch, profile: ConnectionProfile
) -> None:
    async def _broken_connect(**kwargs: Any) -> None:
        raise OSError("connection refused")

    monkeypatch.setattr("psqlcm.connectivity.asyncpg.connect", _broken_connect)

    with pytest.raises(ConnectivityError, match="connection refused"):
        await check_connection(profile)


@pytest.mark.anyio
async def test_check_connection_closes_after_query_error(
    monkeypatch: pytest.MonkeyPatch, profile: ConnectionProfile
) -> None:
    fake_conn = _FakeConnection(fail=True)

    async def _fake_connect(**kwargs: Any) -> _FakeConnection:
        return fake_conn

    monkeypatch.setattr("psqlcm.connectivity.asyncpg.connect", _fake_connect)

    with pytest.raises(ConnectivityError):
        await check_connection(profile)
    assert fake_conn.closed


def test_ping_runs_check_synchronously(monkeypatch: pytest.MonkeyPatch, profile: ConnectionProfile) -> None:
    async def _fake_connect(**kwargs: Any) -> _FakeConnection:
        return _FakeConnection()

    monkeypatch.setattr("psqlcm.connectivity.asyncpg.connect", _fake_connect)

    assert ping(profile) >= 0
