"""Shared fixtures for store tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import SecretStr

from psqlcm.config import StoreConfig
from psqlcm.manager import ConnectionStore
from psqlcm.models import ConnectionProfile, SSLMode

TEST_KEY = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    return tmp_path / "psqlcm"


@pytest.fixture
def config(store_dir: Path) -> StoreConfig:
    return StoreConfig(directory=store_dir, cipher_key=SecretStr(TEST_KEY))


@pytest.fixture
def store(config: StoreConfig) -> ConnectionStore:
    return ConnectionStore(config)


@pytest.fixture
def profile() -> ConnectionProfile:
    return ConnectionProfile(
        host="localhost",
        port=5432,
        database="postgres",
        user="postgres",
        password="secret",
        ssl_mode=SSLMode.REQUIRE,
    )
