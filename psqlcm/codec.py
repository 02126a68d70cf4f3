"""JSON encoding for profile files."""

from __future__ import annotations

import json

from pydantic import ValidationError

from .errors import MalformedRecord
from .models import ConnectionProfile

INDENT = 4
LEGACY_FIELDS = frozenset({"isCurrent"})


def encode(profile: ConnectionProfile) -> bytes:
    """Serialize a (sealed) profile to a pretty-printed JSON document."""

    return (profile.model_dump_json(by_alias=True, indent=INDENT) + "\n").encode("utf-8")


def decode(data: bytes, *, source: str = "<record>") -> ConnectionProfile:
    """Parse a profile document, raising MalformedRecord on any structural problem."""

    try:
        raw = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedRecord(f"{source}: not a JSON document ({exc})") from exc
    if not isinstance(raw, dict):
        raise MalformedRecord(f"{source}: expected a JSON object, got {type(raw).__name__}")
    if "sslmode" not in raw or LEGACY_FIELDS & raw.keys():
        _reject_legacy(raw, source)
    try:
        return ConnectionProfile.model_validate(raw)
    except ValidationError as exc:
        raise MalformedRecord(f"{source}: {_describe(exc)}") from exc


def _reject_legacy(raw: dict[str, object], source: str) -> None:
    legacy = sorted(LEGACY_FIELDS & raw.keys())
    if legacy or {"host", "port", "database", "user", "password"} <= raw.keys():
        detail = f"unexpected field(s) {', '.join(legacy)}" if legacy else "missing 'sslmode'"
        raise MalformedRecord(f"{source}: legacy record schema ({detail}); recreate the connection")


def _describe(exc: ValidationError) -> str:
    problems: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "record"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


__all__ = ["decode", "encode"]
