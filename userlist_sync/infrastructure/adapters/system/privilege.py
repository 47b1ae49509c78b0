"""POSIX privilege check."""

import os


class PosixPrivilegeChecker:
    """Implements the PrivilegeChecker port using the effective user id."""

    def is_privileged(self) -> bool:
        """Return True when running as root."""
        return os.geteuid() == 0
