"""Base report sender with common functionality."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from ....domain.entities import SyncReport


class BaseReportSender(ABC):
    """Abstract base class for report senders posting JSON over HTTP."""

    timeout: float = 30.0

    def __init__(self) -> None:
        """Initialize the report sender."""
        self._logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the sender is properly configured."""
        ...

    @abstractmethod
    def _target_url(self) -> str:
        """URL the payload is posted to."""
        ...

    @abstractmethod
    def _build_payload(self, report: SyncReport) -> dict:
        """Build the JSON body for ``report``."""
        ...

    async def send(self, report: SyncReport) -> bool:
        """Post the report; failures are logged and reported as False."""
        name = self.__class__.__name__
        if not self.is_configured():
            self._logger.warning("%s not configured", name)
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self._target_url(),
                    json=self._build_payload(report),
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPError:
            self._logger.exception("Failed to send report via %s", name)
            return False

        self._logger.info("Report sent via %s", name)
        return True

    @staticmethod
    def format_warnings(report: SyncReport, *, max_items: int = 5) -> str:
        """Format compatibility warnings as a bullet list."""
        lines = [f"• {w}" for w in report.warnings[:max_items]]
        if len(report.warnings) > max_items:
            lines.append(f"... and {len(report.warnings) - max_items} more")
        return "\n".join(lines)
