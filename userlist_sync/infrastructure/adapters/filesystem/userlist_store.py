"""Userlist file store with timestamped backups and atomic replacement."""

from __future__ import annotations

import grp
import logging
import os
import pwd
import shutil
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UserlistFileConfig:
    """Location, ownership and mode of the userlist file."""

    path: Path = Path("/etc/pgbouncer/userlist.txt")
    owner: str | None = "pgbouncer"
    group: str | None = "pgbouncer"
    mode: int = 0o600


class FileUserlistStore:
    """
    Userlist store on the local filesystem.

    Implements the UserlistStore port. New content is written to a
    temporary file in the target's directory and renamed over the target,
    so readers see either the old file or the new one.
    """

    BACKUP_TIMESTAMP_FORMAT: ClassVar[str] = "%Y%m%d%H%M%S"

    def __init__(
        self,
        config: UserlistFileConfig,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize the store.

        Args:
            config: File location, ownership and mode.
            clock: Source of local time for backup names.
        """
        self._config = config
        self._clock = clock

    @property
    def path(self) -> Path:
        """Location of the userlist file."""
        return self._config.path

    def read(self) -> bytes | None:
        """Return the file content, or None if the file does not exist."""
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None

    def backup(self) -> Path | None:
        """Copy the file to ``<path>.bak.<timestamp>`` without overwriting older backups."""
        if not self.path.exists():
            return None

        stamp = self._clock().strftime(self.BACKUP_TIMESTAMP_FORMAT)
        base = f"{self.path.name}.bak.{stamp}"
        target = self.path.with_name(base)
        counter = 1
        while target.exists():
            target = self.path.with_name(f"{base}.{counter}")
            counter += 1

        shutil.copy2(self.path, target)
        return target

    def write(self, content: bytes) -> None:
        """Atomically replace the file with ``content``."""
        uid, gid = self._resolve_ownership()
        directory = self.path.parent

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        replaced = False
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
                os.fchmod(handle.fileno(), self._config.mode)
                if uid != -1 or gid != -1:
                    os.fchown(handle.fileno(), uid, gid)
            os.replace(tmp_path, self.path)
            replaced = True
        finally:
            if not replaced:
                tmp_path.unlink(missing_ok=True)

        # Content is already replaced; a failed directory sync is not a failed write.
        try:
            self._fsync_directory(directory)
        except OSError as e:
            logger.warning("Replaced %s but could not sync %s: %s", self.path, directory, e)
        logger.debug("Replaced %s (%d bytes)", self.path, len(content))

    def _resolve_ownership(self) -> tuple[int, int]:
        """Look up numeric ids for the configured owner and group (-1 keeps current)."""
        uid = gid = -1
        if self._config.owner:
            try:
                uid = pwd.getpwnam(self._config.owner).pw_uid
            except KeyError as e:
                msg = f"Unknown user {self._config.owner!r}"
                raise LookupError(msg) from e
        if self._config.group:
            try:
                gid = grp.getgrnam(self._config.group).gr_gid
            except KeyError as e:
                msg = f"Unknown group {self._config.group!r}"
                raise LookupError(msg) from e
        return uid, gid

    @staticmethod
    def _fsync_directory(directory: Path) -> None:
        """Persist the rename by syncing the directory entry."""
        fd = os.open(directory, os.O_RDONLY)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
