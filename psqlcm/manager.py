"""Connection store facade used by the command line layer."""

from __future__ import annotations

import logging
import time

from . import codec
from .cipher import PasswordCipher
from .config import StoreConfig
from .errors import DanglingCurrentPointer, NotFound
from .models import CURRENT_NAME, ConnectionProfile, ProfileEntry
from .pointer import CurrentPointer
from .store import ProfileStore, validate_name

LOG = logging.getLogger(__name__)


def generate_profile_name() -> str:
    """Default profile name: `pg` followed by the unix time in milliseconds."""

    return f"pg{time.time_ns() // 1_000_000}"


class ConnectionStore:
    """Creates, reads, lists and deletes encrypted connection profiles."""

    def __init__(self, config: StoreConfig) -> None:
        self._config = config
        self._profiles = ProfileStore(config.directory)
        self._pointer = CurrentPointer(config.directory)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def pointer(self) -> CurrentPointer:
        return self._pointer

    def create_profile(
        self,
        profile: ConnectionProfile,
        name: str | None = None,
        *,
        set_current: bool = True,
    ) -> str:
        """Seal the password, persist the profile and optionally make it current.

        A failure after the write leaves the profile saved but not current.
        """

        stored_name = validate_name(name or generate_profile_name())
        cipher = PasswordCipher.from_config(self._config)
        sealed = profile.with_password(cipher.seal(profile.password))
        self._profiles.put(stored_name, codec.encode(sealed))
        if set_current:
            self._pointer.set(stored_name)
        LOG.info("Saved connection", extra={"profile": stored_name, "current": set_current})
        return stored_name

    def read_profile(self, name: str | None = None) -> ConnectionProfile:
        """Load and decrypt a profile; without a name, the current one."""

        cipher = PasswordCipher.from_config(self._config)
        if name is None or name == CURRENT_NAME:
            resolved = self._pointer.resolve()
            if resolved is None:
                raise NotFound("no current connection, run `psqlcm ls`")
            try:
                data = self._profiles.get(resolved)
            except NotFound as exc:
                raise DanglingCurrentPointer(resolved) from exc
            source = resolved
        else:
            data = self._profiles.get(validate_name(name))
            source = name
        stored = codec.decode(data, source=str(self._profiles.path_for(source)))
        return stored.with_password(cipher.open(stored.password))

    def show(self, name: str | None = None) -> str:
        return self.read_profile(name).connection_string()

    def list_profiles(self) -> list[ProfileEntry]:
        """All profiles in lexical order with the current one marked."""

        names = self._profiles.list()
        current = self._pointer.resolve() if CURRENT_NAME in names else None
        names.discard(CURRENT_NAME)
        if current is not None and current not in names:
            LOG.warning("Current connection points to a missing profile", extra={"profile": current})
        return [ProfileEntry(name=entry, current=entry == current) for entry in sorted(names)]

    def delete_profile(self, name: str) -> None:
        """Delete a profile, clearing `current` first when it points here."""

        validate_name(name)
        if not self._profiles.exists(name):
            raise NotFound(f"connection '{name}' does not exist")
        if self._pointer.is_current(name):
            self._pointer.clear()
        self._profiles.delete(name)
        LOG.info("Deleted connection", extra={"profile": name})

    def set_current(self, name: str) -> None:
        validate_name(name)
        if not self._profiles.exists(name):
            raise NotFound(f"connection '{name}' does not exist")
        self._pointer.set(name)
        LOG.info("Set current connection", extra={"profile": name})


__all__ = ["ConnectionStore", "generate_profile_name"]
