"""Store configuration and optional settings file helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import tomllib

from pydantic import BaseModel, Field, SecretStr

from .models import (
    DEFAULT_DATABASE,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SSL_MODE,
    DEFAULT_USER,
    SSLMode,
)

CONFIG_FILE = Path.home() / ".config" / "psqlcm" / "config.toml"
KEY_ENV_VAR = "PSQLCM_KEY"
HOME_ENV_VAR = "HOME"
STORE_SUBDIR = Path(".local") / "share" / "psqlcm"


class PromptDefaults(BaseModel):
    """Values offered in brackets while collecting a new connection."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    database: str = DEFAULT_DATABASE
    user: str = DEFAULT_USER
    sslmode: SSLMode = DEFAULT_SSL_MODE


class Settings(BaseModel):
    """Shape of the optional config.toml."""

    cache_dir: Path | None = None
    strict_key: bool = False
    defaults: PromptDefaults = Field(default_factory=PromptDefaults)


class StoreConfig(BaseModel):
    """Everything the store needs, built once at process start."""

    directory: Path
    cipher_key: SecretStr | None = None
    strict_key: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        directory: Path | str | None = None,
        settings: Settings | None = None,
    ) -> StoreConfig:
        """Resolve the store directory and key: option > settings file > environment."""

        env = os.environ if environ is None else environ
        settings = settings or Settings()
        if directory is not None:
            store_dir = Path(directory).expanduser()
        elif settings.cache_dir is not None:
            store_dir = settings.cache_dir.expanduser()
        else:
            store_dir = default_store_dir(env)
        key = env.get(KEY_ENV_VAR) or None
        return cls(
            directory=store_dir,
            cipher_key=SecretStr(key) if key else None,
            strict_key=settings.strict_key,
        )


def default_store_dir(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    home = env.get(HOME_ENV_VAR)
    base = Path(home) if home else Path.home()
    return base / STORE_SUBDIR


def load_settings() -> Settings:
    """Load settings from disk; fall back to defaults if missing or unreadable."""

    try:
        data = _read_settings_file()
    except FileNotFoundError:
        return Settings()
    except (tomllib.TOMLDecodeError, OSError):
        return Settings()
    return Settings(**data)


def _read_settings_file() -> dict[str, object]:
    with CONFIG_FILE.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    cache_dir = raw.get("cache_dir")
    if isinstance(cache_dir, str) and cache_dir:
        data["cache_dir"] = Path(cache_dir)
    strict_key = raw.get("strict_key")
    if isinstance(strict_key, bool):
        data["strict_key"] = strict_key
    defaults = raw.get("defaults")
    if isinstance(defaults, dict):
        parsed: dict[str, object] = {}
        for key in ("host", "database", "user"):
            value = defaults.get(key)
            if isinstance(value, str) and value:
                parsed[key] = value
        port = defaults.get("port")
        if isinstance(port, int) and not isinstance(port, bool) and 1 <= port <= 65535:
            parsed["port"] = port
        sslmode = defaults.get("sslmode")
        if isinstance(sslmode, str) and sslmode in {mode.value for mode in SSLMode}:
            parsed["sslmode"] = SSLMode(sslmode)
        data["defaults"] = PromptDefaults(**parsed)
    return data


__all__ = [
    "CONFIG_FILE",
    "KEY_ENV_VAR",
    "PromptDefaults",
    "Settings",
    "StoreConfig",
    "default_store_dir",
    "load_settings",
]
