"""Sync report summarizing a single run for notification senders."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from ..value_objects import SyncOutcome, SyncStage


@dataclass(frozen=True, slots=True)
class SyncReport:
    """Outcome of one userlist sync run."""

    outcome: SyncOutcome
    stage: SyncStage
    message: str
    userlist_path: str
    entry_count: int = 0
    backup_path: str | None = None
    restarted: bool = False
    dry_run: bool = False
    warnings: tuple[str, ...] = ()
    hostname: str = ""
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def success(self) -> bool:
        """Check if the run finished without error."""
        return self.outcome != SyncOutcome.FAILED

    def get_summary(self) -> str:
        """Generate a human-readable one-line summary."""
        match self.outcome:
            case SyncOutcome.UNCHANGED:
                return f"No changes detected in {self.userlist_path}"
            case SyncOutcome.WOULD_UPDATE:
                return f"DRY RUN: {self.userlist_path} would be updated with {self.entry_count} entries"
            case SyncOutcome.UPDATED:
                summary = f"Updated {self.userlist_path} with {self.entry_count} entries"
                if self.restarted:
                    summary += "; service restarted"
                return summary
            case SyncOutcome.FAILED:
                return f"Userlist sync failed during {self.stage}: {self.message}"
