"""Generic webhook report sender."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import BaseReportSender

if TYPE_CHECKING:
    from ....domain.entities import SyncReport


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    """Webhook report configuration."""

    enabled: bool = False
    url: str = ""


class WebhookReportSender(BaseReportSender):
    """Send run reports via generic HTTP webhook with JSON payload."""

    def __init__(self, config: WebhookConfig) -> None:
        """Initialize the webhook sender."""
        super().__init__()
        self._config = config

    def is_configured(self) -> bool:
        """Check if webhook is properly configured."""
        return self._config.enabled and bool(self._config.url)

    def _target_url(self) -> str:
        return self._config.url

    def _build_payload(self, report: SyncReport) -> dict:
        """Build the JSON payload for the webhook."""
        return {
            "event_type": "pgbouncer_userlist_sync",
            "timestamp": report.generated_at.isoformat(),
            "host": report.hostname,
            "success": report.success,
            "outcome": str(report.outcome),
            "stage": str(report.stage),
            "summary": report.get_summary(),
            "userlist_path": report.userlist_path,
            "entry_count": report.entry_count,
            "backup_path": report.backup_path,
            "restarted": report.restarted,
            "dry_run": report.dry_run,
            "warnings": list(report.warnings),
        }
