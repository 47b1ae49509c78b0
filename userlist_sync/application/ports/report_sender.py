"""Port for run report delivery - driven/secondary port."""

from typing import Protocol

from ...domain.entities import SyncReport


class ReportSender(Protocol):
    """
    Port for publishing the outcome of a sync run.

    Delivery is best effort and never changes the run's exit code.
    """

    async def send(self, report: SyncReport) -> bool:
        """
        Send the report.

        Returns:
            True if the report was delivered.
        """
        ...

    def is_configured(self) -> bool:
        """Check if this sender is ready to send reports."""
        ...
