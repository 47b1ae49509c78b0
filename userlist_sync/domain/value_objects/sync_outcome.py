"""Sync outcome and stage value objects."""

from enum import StrEnum, auto


class SyncOutcome(StrEnum):
    """Result of comparing the rendered userlist with the file on disk."""

    UNCHANGED = auto()
    UPDATED = auto()
    WOULD_UPDATE = auto()
    FAILED = auto()

    def __str__(self) -> str:
        return self.value


class SyncStage(StrEnum):
    """Stages of a sync run, in execution order."""

    START = auto()
    PREFLIGHT = auto()
    FETCH = auto()
    SANITIZE = auto()
    DIFF = auto()
    APPLY = auto()
    RESTART = auto()
    DONE = auto()

    def __str__(self) -> str:
        return self.value
