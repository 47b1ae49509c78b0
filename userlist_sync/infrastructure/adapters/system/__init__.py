"""Host system adapters."""

from .privilege import PosixPrivilegeChecker

__all__ = ["PosixPrivilegeChecker"]
