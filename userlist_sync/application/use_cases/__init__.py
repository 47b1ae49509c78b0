"""Application use cases."""

from .sync_userlist import SyncResult, SyncUserlist

__all__ = [
    "SyncResult",
    "SyncUserlist",
]
