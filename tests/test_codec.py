"""Tests for the profile file encoding."""

from __future__ import annotations

import json

import pytest

from psqlcm import codec
from psqlcm.errors import MalformedRecord
from psqlcm.models import ConnectionProfile, SSLMode


def _record(**overrides: object) -> bytes:
    data: dict[str, object] = {
        "host": "db.internal",
        "port": 6432,
        "database": "app",
        "user": "app",
        "password": "c2VhbGVk",
        "sslmode": "verify-full",
    }
    data.update(overrides)
    return json.dumps({key: value for key, value in data.items() if value is not ...}).encode()


def test_encode_is_indented_json_with_on_disk_names(profile: ConnectionProfile) -> None:
    text = codec.encode(profile).decode()

    assert text.endswith("}\n")
    assert '\n    "host": "localhost",' in text
    assert list(json.loads(text)) == ["host", "port", "database", "user", "password", "sslmode"]
    assert json.loads(text)["sslmode"] == "require"


def test_decode_reads_record() -> None:
    result = codec.decode(_record())

    assert result.host == "db.internal"
    assert result.port == 6432
    assert result.ssl_mode is SSLMode.VERIFY_FULL


def test_decode_inverts_encode(profile: ConnectionProfile) -> None:
    assert codec.decode(codec.encode(profile)) == profile


@pytest.mark.parametrize(
    "overrides",
    [
        {"port": "5432"},
        {"port": 54.32},
        {"port": True},
        {"port": 0},
        {"port": 70000},
        {"host": ...},
        {"password": ...},
        {"host": ""},
        {"sslmode": "sometimes"},
    ],
)
def test_decode_rejects_invalid_fields(overrides: dict[str, object]) -> None:
    with pytest.raises(MalformedRecord):
        codec.decode(_record(**overrides))


@pytest.mark.parametrize("payload", [b"", b"not json", b"[1, 2]", b"\xff\xfe"])
def test_decode_rejects_non_documents(payload: bytes) -> None:
    with pytest.raises(MalformedRecord):
        codec.decode(payload)


def test_decode_names_legacy_schema() -> None:
    with pytest.raises(MalformedRecord, match="legacy record schema"):
        codec.decode(_record(sslmode=...))
    with pytest.raises(MalformedRecord, match="isCurrent"):
        codec.decode(_record(isCurrent=True))


def test_decode_error_names_source() -> None:
    with pytest.raises(MalformedRecord, match="/store/pg1"):
        codec.decode(b"{}", source="/store/pg1")
