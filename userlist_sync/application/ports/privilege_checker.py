"""Port for checking the caller's privilege."""

from typing import Protocol


class PrivilegeChecker(Protocol):
    """Port for checking whether the process may change system files and services."""

    def is_privileged(self) -> bool:
        """Return True when running with elevated privilege."""
        ...
