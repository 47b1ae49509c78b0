"""Tests for PgBouncer service and configuration adapters."""

from __future__ import annotations

from pathlib import Path

import pytest

from userlist_sync.application.exceptions import ServiceControlError
from userlist_sync.infrastructure.adapters.pgbouncer import (
    PgBouncerIniConfig,
    ServiceConfig,
    SystemdServiceManager,
)


class ScriptedRunner:
    """Replacement for SystemdServiceManager._run returning canned results."""

    def __init__(self, results: dict[str, list[tuple[int, str]]]) -> None:
        self.results = results
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, *args: str) -> tuple[int, str]:
        self.calls.append(args)
        queue = self.results[args[1]]
        return queue.pop(0) if len(queue) > 1 else queue[0]


@pytest.fixture
def manager() -> SystemdServiceManager:
    return SystemdServiceManager(ServiceConfig(service_name="pgbouncer", binary="pgbouncer"))


class TestSystemdServiceManager:
    """Tests for SystemdServiceManager."""

    @pytest.mark.asyncio
    async def test_is_active(self, manager, monkeypatch) -> None:
        """Exit code 0 from is-active means active."""
        runner = ScriptedRunner({"is-active": [(0, "")]})
        monkeypatch.setattr(manager, "_run", runner)

        assert await manager.is_active() is True
        assert runner.calls == [("systemctl", "is-active", "--quiet", "pgbouncer")]

    @pytest.mark.asyncio
    async def test_is_inactive(self, manager, monkeypatch) -> None:
        """Non-zero exit from is-active means inactive."""
        monkeypatch.setattr(manager, "_run", ScriptedRunner({"is-active": [(3, "")]}))
        assert await manager.is_active() is False

    @pytest.mark.asyncio
    async def test_is_active_when_systemctl_missing(self, manager, monkeypatch) -> None:
        """A missing systemctl is reported as inactive."""

        async def missing(*_args: str) -> tuple[int, str]:
            raise ServiceControlError("Unable to run systemctl")

        monkeypatch.setattr(manager, "_run", missing)
        assert await manager.is_active() is False

    @pytest.mark.asyncio
    async def test_restart_failure(self, manager, monkeypatch) -> None:
        """A non-zero restart raises ServiceControlError."""
        monkeypatch.setattr(manager, "_run", ScriptedRunner({"restart": [(1, "Job failed")]}))
        with pytest.raises(ServiceControlError, match="Job failed"):
            await manager.restart()

    @pytest.mark.asyncio
    async def test_get_version(self, manager, monkeypatch) -> None:
        """The binary's version output is returned."""
        monkeypatch.setattr(manager, "_run", ScriptedRunner({"--version": [(0, "PgBouncer 1.21.0")]}))
        assert await manager.get_version() == "PgBouncer 1.21.0"

    @pytest.mark.asyncio
    async def test_wait_until_active_eventually(self, manager, monkeypatch) -> None:
        """Polling stops once the service reports active."""
        runner = ScriptedRunner({"is-active": [(3, ""), (3, ""), (0, "")]})
        monkeypatch.setattr(manager, "_run", runner)

        assert await manager.wait_until_active(timeout=5.0, poll_interval=0.001) is True
        assert len(runner.calls) == 3

    @pytest.mark.asyncio
    async def test_wait_until_active_times_out(self, manager, monkeypatch) -> None:
        """A service that never comes back times out."""
        monkeypatch.setattr(manager, "_run", ScriptedRunner({"is-active": [(3, "")]}))
        assert await manager.wait_until_active(timeout=0.05, poll_interval=0.01) is False

    @pytest.mark.asyncio
    async def test_run_missing_binary(self) -> None:
        """Running a missing binary raises ServiceControlError."""
        manager = SystemdServiceManager(ServiceConfig(binary="/nonexistent/pgbouncer"))
        with pytest.raises(ServiceControlError, match="Unable to run"):
            await manager.get_version()

    def test_is_installed(self) -> None:
        """Installation is detected on the PATH."""
        assert SystemdServiceManager(ServiceConfig(binary="sh")).is_installed() is True
        assert SystemdServiceManager(ServiceConfig(binary="no-such-binary-xyz")).is_installed() is False


class TestPgBouncerIniConfig:
    """Tests for PgBouncerIniConfig."""

    def test_reads_auth_type(self, tmp_path: Path) -> None:
        """auth_type is read from the ini file."""
        ini = tmp_path / "pgbouncer.ini"
        ini.write_text(
            "[databases]\n* = host=localhost\n\n[pgbouncer]\n"
            "listen_port = 6432\nauth_type = scram-sha-256 ; comment\n"
            "auth_file = /etc/pgbouncer/userlist.txt\n"
        )
        assert PgBouncerIniConfig(ini).get_auth_type() == "scram-sha-256"

    def test_last_assignment_wins(self, tmp_path: Path) -> None:
        """A later assignment overrides an earlier one."""
        ini = tmp_path / "pgbouncer.ini"
        ini.write_text("[pgbouncer]\nauth_type = md5\nauth_type=scram-sha-256\n")
        assert PgBouncerIniConfig(ini).get_auth_type() == "scram-sha-256"

    def test_commented_assignment_ignored(self, tmp_path: Path) -> None:
        """Commented-out settings are not read."""
        ini = tmp_path / "pgbouncer.ini"
        ini.write_text("[pgbouncer]\n;auth_type = scram-sha-256\n")
        assert PgBouncerIniConfig(ini).get_auth_type() is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """An unreadable file yields None."""
        assert PgBouncerIniConfig(tmp_path / "absent.ini").get_auth_type() is None
