"""Domain value objects - Immutable objects defined by their attributes."""

from .auth_method import AuthMethod
from .software_version import SoftwareVersion
from .sync_outcome import SyncOutcome, SyncStage

__all__ = [
    "AuthMethod",
    "SoftwareVersion",
    "SyncOutcome",
    "SyncStage",
]
