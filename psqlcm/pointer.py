"""The `current` symlink naming the active profile."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import StoreIOError
from .models import CURRENT_NAME

LOG = logging.getLogger(__name__)


class CurrentPointer:
    """Records which profile is current without owning or reading it.

    Repointing is remove-then-create: a crash in between leaves no pointer,
    never two pointers. Nothing here checks that the target still exists.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)
        self._link = self._directory / CURRENT_NAME

    @property
    def path(self) -> Path:
        return self._link

    def resolve(self) -> str | None:
        """Name of the profile `current` points at, or None when unset."""

        if not os.path.lexists(self._link):
            return None
        try:
            target = os.readlink(self._link)
        except OSError as exc:
            raise StoreIOError(f"error reading current link {self._link}: {exc}") from exc
        return Path(target).name

    def is_current(self, name: str) -> bool:
        return self.resolve() == name

    def set(self, name: str) -> None:
        self.clear()
        target = self._directory.resolve() / name
        try:
            os.symlink(target, self._link)
        except OSError as exc:
            raise StoreIOError(f"error setting '{name}' as current: {exc}") from exc
        LOG.debug("Repointed current connection", extra={"profile": name})

    def clear(self) -> None:
        try:
            self._link.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StoreIOError(f"error removing current link {self._link}: {exc}") from exc
        LOG.debug("Cleared current connection", extra={"path": str(self._link)})


__all__ = ["CurrentPointer"]
