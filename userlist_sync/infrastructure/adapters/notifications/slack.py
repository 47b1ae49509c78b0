"""Slack report sender."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ....domain.value_objects import SyncOutcome
from .base import BaseReportSender

if TYPE_CHECKING:
    from ....domain.entities import SyncReport


@dataclass(frozen=True, slots=True)
class SlackConfig:
    """Slack report configuration."""

    enabled: bool = False
    webhook_url: str = ""


_EMOJI = {
    SyncOutcome.UNCHANGED: "🟢",
    SyncOutcome.UPDATED: "🔵",
    SyncOutcome.WOULD_UPDATE: "🟡",
    SyncOutcome.FAILED: "🔴",
}


class SlackReportSender(BaseReportSender):
    """Send run reports to Slack via incoming webhook."""

    def __init__(self, config: SlackConfig) -> None:
        """Initialize the Slack sender."""
        super().__init__()
        self._config = config

    def is_configured(self) -> bool:
        """Check if Slack is properly configured."""
        return self._config.enabled and bool(self._config.webhook_url)

    def _target_url(self) -> str:
        return self._config.webhook_url

    def _build_payload(self, report: SyncReport) -> dict:
        """Build a Slack message using Block Kit."""
        blocks: list[dict] = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"{_EMOJI[report.outcome]} PgBouncer Userlist Sync",
                    "emoji": True,
                },
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*{report.get_summary()}*"},
            },
            {
                "type": "section",
                "fields": [
                    {"type": "mrkdwn", "text": f"*Host:*\n{report.hostname or 'unknown'}"},
                    {"type": "mrkdwn", "text": f"*Entries:*\n{report.entry_count}"},
                    {"type": "mrkdwn", "text": f"*Stage:*\n{report.stage}"},
                    {"type": "mrkdwn", "text": f"*Restarted:*\n{'yes' if report.restarted else 'no'}"},
                ],
            },
        ]

        if report.backup_path:
            blocks.append({
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": f"Backup: `{report.backup_path}`"}],
            })

        if report.warnings:
            blocks.append({"type": "divider"})
            blocks.append({
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*Warnings:*\n{self.format_warnings(report)}"},
            })

        return {"blocks": blocks}
