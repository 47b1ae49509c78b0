"""Tests for the composition root."""

from __future__ import annotations

import pytest

from userlist_sync.domain.entities import SyncReport
from userlist_sync.domain.value_objects import SyncOutcome, SyncStage
from userlist_sync.infrastructure.config import Settings
from userlist_sync.main import Application, ApplicationContainer, async_main


class RecordingSender:
    """Report sender collecting every report."""

    def __init__(self, delivered: bool = True) -> None:
        self.delivered = delivered
        self.reports: list[SyncReport] = []

    def is_configured(self) -> bool:
        return True

    async def send(self, report: SyncReport) -> bool:
        self.reports.append(report)
        return self.delivered


class FakeContainer(ApplicationContainer):
    """Container wiring the test fakes instead of real adapters."""

    def __init__(self, settings: Settings, use_case, sender: RecordingSender) -> None:
        super().__init__(settings)
        self._use_case = use_case
        self._sender = sender

    def create_sync_use_case(self):
        return self._use_case

    def create_report_senders(self):
        return [self._sender]


@pytest.fixture
def settings(userlist_path) -> Settings:
    return Settings(userlist_path=str(userlist_path), dry_run=False)


class TestApplication:
    """Tests for Application.run exit codes and reporting."""

    @pytest.mark.asyncio
    async def test_success_exit_code(self, settings, make_use_case) -> None:
        """A successful update exits 0 and reports the outcome."""
        sender = RecordingSender()
        app = Application(settings, FakeContainer(settings, make_use_case(), sender))

        assert await app.run() == 0

        report = sender.reports[0]
        assert report.outcome == SyncOutcome.UPDATED
        assert report.stage == SyncStage.DONE
        assert report.entry_count == 1
        assert report.restarted is True

    @pytest.mark.asyncio
    async def test_fetch_failure_exit_code(self, settings, make_use_case, catalog, userlist_path) -> None:
        """An empty catalog exits non-zero and reports the failing stage."""
        catalog.rows = []
        sender = RecordingSender()
        app = Application(settings, FakeContainer(settings, make_use_case(), sender))

        exit_code = await app.run()

        assert exit_code == 3
        assert not userlist_path.exists()
        assert sender.reports[0].outcome == SyncOutcome.FAILED
        assert sender.reports[0].stage == SyncStage.FETCH

    @pytest.mark.asyncio
    async def test_restart_failure_exit_code(self, settings, make_use_case, service, userlist_path) -> None:
        """A restart failure exits non-zero with the new file kept."""
        service.comes_back = False
        app = Application(settings, FakeContainer(settings, make_use_case(), RecordingSender()))

        assert await app.run() == 6
        assert userlist_path.exists()

    @pytest.mark.asyncio
    async def test_precondition_exit_code(self, settings, make_use_case, privilege_checker) -> None:
        """An unprivileged run exits with the precondition code."""
        privilege_checker.privileged = False
        app = Application(settings, FakeContainer(settings, make_use_case(), RecordingSender()))

        assert await app.run() == 2

    @pytest.mark.asyncio
    async def test_report_failure_does_not_change_exit_code(self, settings, make_use_case) -> None:
        """Undelivered reports are logged only."""
        app = Application(settings, FakeContainer(settings, make_use_case(), RecordingSender(delivered=False)))

        assert await app.run() == 0


class TestAsyncMain:
    """Tests for the async entry point."""

    @pytest.mark.asyncio
    async def test_configuration_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Invalid configuration exits 1."""
        monkeypatch.setenv("USERLIST_PATH", "relative.txt")
        assert await async_main() == 1
