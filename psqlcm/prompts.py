"""Interactive prompts that collect a new connection from the terminal."""

from __future__ import annotations

import getpass
from typing import Callable

from .config import PromptDefaults
from .models import ConnectionProfile, SSLMode

LineReader = Callable[[str], str]


class PromptError(ValueError):
    """Raised when an answer cannot be turned into a connection field."""


def collect_profile(
    defaults: PromptDefaults | None = None,
    *,
    read_line: LineReader = input,
    read_secret: LineReader = getpass.getpass,
) -> ConnectionProfile:
    """Ask for each field in turn; blank answers take the bracketed default."""

    defaults = defaults or PromptDefaults()
    host = _ask(read_line, "Hostname", defaults.host)
    port_raw = _ask(read_line, "Port", str(defaults.port))
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise PromptError(f"error converting port to int: {port_raw!r}") from exc
    if not 1 <= port <= 65535:
        raise PromptError(f"port out of range: {port}")
    database = _ask(read_line, "Database", defaults.database)
    user = _ask(read_line, "User", defaults.user)
    password = read_secret("Password: ")
    sslmode_raw = _ask(read_line, "SSL mode", defaults.sslmode.value)
    try:
        ssl_mode = SSLMode(sslmode_raw)
    except ValueError as exc:
        raise PromptError(f"unsupported SSL mode: {sslmode_raw!r}") from exc
    return ConnectionProfile(
        host=host,
        port=port,
        database=database,
        user=user,
        password=password,
        ssl_mode=ssl_mode,
    )


def prompt_name(default: str, *, read_line: LineReader = input) -> str:
    return _ask(read_line, "Connection name", default)


def confirm(question: str, *, read_line: LineReader = input) -> bool:
    """Yes unless the answer starts with something other than `y`."""

    answer = read_line(f"{question} [Y/n] ").strip()
    return not answer or answer[0].lower() == "y"


def _ask(read_line: LineReader, label: str, default: str) -> str:
    answer = read_line(f"{label} [{default}]: ").strip()
    return answer or default


__all__ = ["PromptError", "collect_profile", "confirm", "prompt_name"]
