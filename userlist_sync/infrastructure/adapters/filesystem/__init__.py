"""Filesystem adapters."""

from .userlist_store import FileUserlistStore, UserlistFileConfig

__all__ = ["FileUserlistStore", "UserlistFileConfig"]
