"""Directory-scoped storage of profile files."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .errors import DirectoryCreateFailed, InvalidProfileName, NotFound, StoreIOError
from .models import CURRENT_NAME

LOG = logging.getLogger(__name__)


def validate_name(name: str) -> str:
    """Reject names that cannot safely live as a file in the store directory."""

    if not name:
        raise InvalidProfileName("profile name must not be empty")
    if name == CURRENT_NAME:
        raise InvalidProfileName(f"'{CURRENT_NAME}' is reserved for the current connection pointer")
    if name.startswith("."):
        raise InvalidProfileName(f"profile name '{name}' must not start with '.'")
    if "/" in name or (os.sep != "/" and os.sep in name) or "\0" in name:
        raise InvalidProfileName(f"profile name '{name}' must not contain path separators")
    return name


class ProfileStore:
    """CRUD over the files inside a single store directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Path:
        return self._directory / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def put(self, name: str, data: bytes) -> None:
        """Write a record via a temporary file + rename; readers never see partial data.

        `mkstemp` creates the file with mode 0600, which the rename preserves.
        """

        validate_name(name)
        self._ensure_directory()
        target = self.path_for(name)
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".psqlcm-", suffix=".tmp", dir=self._directory)
        except OSError as exc:
            raise StoreIOError(f"error writing connection file {target}: {exc}") from exc
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp, target)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StoreIOError(f"error writing connection file {target}: {exc}") from exc
        LOG.debug("Stored profile", extra={"profile": name, "path": str(target)})

    def get(self, name: str) -> bytes:
        path = self.path_for(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFound(f"connection '{name}' does not exist") from exc
        except OSError as exc:
            raise StoreIOError(f"error reading connection file {path}: {exc}") from exc

    def list(self) -> set[str]:
        """Every visible entry in the directory, the `current` pointer included."""

        try:
            entries = os.listdir(self._directory)
        except FileNotFoundError:
            return set()
        except OSError as exc:
            raise StoreIOError(f"error reading store directory {self._directory}: {exc}") from exc
        return {entry for entry in entries if not entry.startswith(".")}

    def delete(self, name: str) -> None:
        """Remove a profile file.

        Callers must clear or repoint `current` first when it targets `name`.
        """

        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NotFound(f"connection '{name}' does not exist") from exc
        except OSError as exc:
            raise StoreIOError(f"error deleting connection file {path}: {exc}") from exc
        LOG.debug("Deleted profile", extra={"profile": name})

    def _ensure_directory(self) -> None:
        if self._directory.is_dir():
            return
        try:
            self._directory.mkdir(exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateFailed(f"error making store directory {self._directory}: {exc}") from exc
        LOG.debug("Created store directory", extra={"path": str(self._directory)})


__all__ = ["ProfileStore", "validate_name"]
