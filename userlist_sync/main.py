#!/usr/bin/env python3
"""
PgBouncer Userlist Sync

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import socket
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from . import __version__
from .application.exceptions import SyncError
from .application.use_cases import SyncUserlist
from .domain.entities import SyncReport
from .domain.services import SecretNormalizer
from .domain.value_objects import SyncOutcome, SyncStage
from .infrastructure.adapters import (
    FileUserlistStore,
    PgBouncerIniConfig,
    PosixPrivilegeChecker,
    PostgresAuthCatalog,
    SlackReportSender,
    SystemdServiceManager,
    WebhookReportSender,
)
from .infrastructure.config import LOG_FORMAT, Settings, attach_log_file, load_settings

if TYPE_CHECKING:
    from .application.ports import ReportSender
    from .application.use_cases.sync_userlist import SyncResult

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_userlist_store(self) -> FileUserlistStore:
        """Create the userlist file adapter."""
        return FileUserlistStore(self._settings.userlist_file_config)

    def create_report_senders(self) -> list[ReportSender]:
        """Create all configured report sender adapters."""
        senders: list[ReportSender] = [
            WebhookReportSender(self._settings.webhook_config),
            SlackReportSender(self._settings.slack_config),
        ]

        configured = [s for s in senders if s.is_configured()]
        logger.debug(
            "Configured report senders: %s",
            [s.__class__.__name__ for s in configured] or "None",
        )

        return configured

    def create_sync_use_case(self) -> SyncUserlist:
        """Create the main use case with all dependencies."""
        settings = self._settings
        return SyncUserlist(
            catalog=PostgresAuthCatalog(settings.postgres_config),
            service=SystemdServiceManager(settings.service_config),
            pooler_config=PgBouncerIniConfig(Path(settings.pgbouncer_ini_path)),
            store=self.create_userlist_store(),
            privilege_checker=PosixPrivilegeChecker(),
            normalizer=SecretNormalizer(settings.expected_secret_tag),
            min_pooler_version=settings.min_pooler_version,
            restart_timeout=settings.restart_timeout_seconds,
            restart_poll_interval=settings.restart_poll_interval,
            strict_secret_validation=settings.strict_secret_validation,
            dry_run=settings.dry_run,
        )


class Application:
    """
    Main application orchestrator.

    Runs one sync, maps its outcome to an exit code and publishes the report.
    """

    def __init__(self, settings: Settings, container: ApplicationContainer | None = None) -> None:
        """Initialize application with settings."""
        self._settings = settings
        self._container = container or ApplicationContainer(settings)

    async def run(self) -> int:
        """
        Execute a single userlist sync.

        Returns:
            Exit code (0 for success, the failing stage's code otherwise).
        """
        use_case = self._container.create_sync_use_case()
        try:
            result = await use_case.execute()
        except SyncError as e:
            logger.error("ERROR: %s", e)
            await self._publish(self._failure_report(e))
            return e.exit_code

        report = self._success_report(result)
        logger.info("%s", report.get_summary())
        await self._publish(report)
        return 0

    def _success_report(self, result: SyncResult) -> SyncReport:
        """Build the report for a completed run."""
        return SyncReport(
            outcome=result.outcome,
            stage=SyncStage.DONE,
            message="",
            userlist_path=self._settings.userlist_path,
            entry_count=result.entry_count,
            backup_path=str(result.backup_path) if result.backup_path else None,
            restarted=result.restarted,
            dry_run=result.dry_run,
            warnings=tuple(str(w) for w in result.warnings),
            hostname=socket.gethostname(),
        )

    def _failure_report(self, error: SyncError) -> SyncReport:
        """Build the report for an aborted run."""
        return SyncReport(
            outcome=SyncOutcome.FAILED,
            stage=error.stage,
            message=str(error),
            userlist_path=self._settings.userlist_path,
            dry_run=self._settings.dry_run,
            hostname=socket.gethostname(),
        )

    async def _publish(self, report: SyncReport) -> None:
        """Send the report through every configured sender."""
        for sender in self._container.create_report_senders():
            if not await sender.send(report):
                logger.warning("Report delivery failed via %s", sender.__class__.__name__)


async def async_main() -> int:
    """Async entry point."""
    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())
        attach_log_file(
            Path(settings.log_file),
            owner=settings.pgbouncer_user or None,
            group=settings.pgbouncer_group or None,
        )

        logger.info("PgBouncer userlist sync %s starting...", __version__)
        app = Application(settings)
        return await app.run()

    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    exit_code = asyncio.run(async_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
