"""Application layer exceptions."""

from typing import ClassVar

from ..domain.value_objects import SyncStage


class ApplicationError(Exception):
    """Base exception for application errors."""


class CatalogError(ApplicationError):
    """Raised when the authentication catalog cannot be queried."""


class ServiceControlError(ApplicationError):
    """Raised when the service manager cannot run a command."""


class SyncError(ApplicationError):
    """Base exception for failures that abort a sync run."""

    stage: ClassVar[SyncStage] = SyncStage.START
    exit_code: ClassVar[int] = 1


class PreconditionError(SyncError):
    """Raised when privilege, binary or database checks fail. Nothing is written."""

    stage = SyncStage.PREFLIGHT
    exit_code = 2


class FetchError(SyncError):
    """Raised when the catalog query fails or yields no usable rows."""

    stage = SyncStage.FETCH
    exit_code = 3


class SanitizeError(SyncError):
    """Raised when a fetched row cannot be written as a userlist line."""

    stage = SyncStage.SANITIZE
    exit_code = 4


class ApplyError(SyncError):
    """Raised when backup, write, rename or permission changes fail."""

    stage = SyncStage.APPLY
    exit_code = 5


class RestartError(SyncError):
    """Raised when the service does not come back after restart. The new file is kept."""

    stage = SyncStage.RESTART
    exit_code = 6


class CompatibilityWarning(UserWarning):
    """Non-fatal capability mismatch between the catalog and the pooler."""
