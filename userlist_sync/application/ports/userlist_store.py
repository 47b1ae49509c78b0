"""Port for the userlist file - driven/secondary port."""

from pathlib import Path
from typing import Protocol


class UserlistStore(Protocol):
    """
    Port for reading, backing up and replacing the userlist file.

    The application is the file's only writer.
    """

    @property
    def path(self) -> Path:
        """Location of the userlist file."""
        ...

    def read(self) -> bytes | None:
        """Return the current file content, or None if the file is absent."""
        ...

    def backup(self) -> Path | None:
        """
        Copy the current file to a new timestamped backup.

        Returns:
            The backup path, or None if there was no file to back up.

        Raises:
            OSError: If the copy fails.
        """
        ...

    def write(self, content: bytes) -> None:
        """
        Atomically replace the file content and apply ownership and mode.

        The previous content stays intact if the write is interrupted. Errors are
        raised only while the previous content is still in place.

        Raises:
            OSError: If writing, renaming or changing permissions fails.
            LookupError: If the configured owner or group does not exist.
        """
        ...
