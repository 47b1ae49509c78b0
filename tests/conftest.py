"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from userlist_sync.application.exceptions import CatalogError, ServiceControlError
from userlist_sync.application.use_cases import SyncUserlist
from userlist_sync.domain.entities import CatalogRow
from userlist_sync.domain.services import SecretNormalizer
from userlist_sync.infrastructure.adapters.filesystem import FileUserlistStore, UserlistFileConfig

ALICE_SECRET = "SCRAM-SHA-256$4096:abcd$efgh:ijkl"
BOB_SECRET = "SCRAM-SHA-256$4096:c2FsdA==$c3RvcmVk:c2VydmVy"


class FakeCatalog:
    """In-memory authentication catalog."""

    def __init__(
        self,
        rows: list[CatalogRow] | None = None,
        *,
        password_encryption: str = "scram-sha-256",
        reachable: bool = True,
        fail_fetch: bool = False,
    ) -> None:
        self.rows = rows or []
        self.password_encryption = password_encryption
        self.reachable = reachable
        self.fail_fetch = fail_fetch
        self.fetch_calls = 0

    async def ping(self) -> None:
        if not self.reachable:
            msg = "connection refused"
            raise CatalogError(msg)

    async def get_password_encryption(self) -> str:
        return self.password_encryption

    async def fetch_login_credentials(self) -> list[CatalogRow]:
        self.fetch_calls += 1
        if self.fail_fetch:
            msg = "server closed the connection unexpectedly"
            raise CatalogError(msg)
        return list(self.rows)


class FakeServiceManager:
    """Service manager recording restarts."""

    def __init__(
        self,
        *,
        installed: bool = True,
        active: bool = True,
        version: str = "PgBouncer 1.21.0",
        comes_back: bool = True,
        restart_fails: bool = False,
    ) -> None:
        self.installed = installed
        self.active = active
        self.version = version
        self.comes_back = comes_back
        self.restart_fails = restart_fails
        self.restart_calls = 0

    def is_installed(self) -> bool:
        return self.installed

    async def get_version(self) -> str:
        return self.version

    async def is_active(self) -> bool:
        return self.active

    async def restart(self) -> None:
        self.restart_calls += 1
        if self.restart_fails:
            msg = "Job for pgbouncer.service failed"
            raise ServiceControlError(msg)
        self.active = self.comes_back

    async def wait_until_active(self, timeout: float, poll_interval: float) -> bool:
        return self.active


class FakePoolerConfig:
    """Pooler configuration returning a fixed auth_type."""

    def __init__(self, auth_type: str | None = "scram-sha-256") -> None:
        self.auth_type = auth_type

    def get_auth_type(self) -> str | None:
        return self.auth_type


class FakePrivilegeChecker:
    """Privilege checker with a fixed answer."""

    def __init__(self, privileged: bool = True) -> None:
        self.privileged = privileged

    def is_privileged(self) -> bool:
        return self.privileged


def row(username: str, secret: str | None, *, can_login: bool = True) -> CatalogRow:
    """Build a catalog row."""
    return CatalogRow(
        username=username,
        secret_hash=secret,
        can_login=can_login,
        password_encryption="scram-sha-256",
    )


@pytest.fixture
def userlist_path(tmp_path: Path) -> Path:
    """Location of the userlist file inside a temporary directory."""
    return tmp_path / "userlist.txt"


@pytest.fixture
def store(userlist_path: Path) -> FileUserlistStore:
    """File store without ownership changes, with a fixed clock."""
    return FileUserlistStore(
        UserlistFileConfig(path=userlist_path, owner=None, group=None),
        clock=lambda: datetime(2026, 10, 18, 9, 30, 0),
    )


@pytest.fixture
def catalog() -> FakeCatalog:
    """Catalog holding alice with a SCRAM verifier."""
    return FakeCatalog([row("alice", ALICE_SECRET)])


@pytest.fixture
def service() -> FakeServiceManager:
    """A running, recent PgBouncer."""
    return FakeServiceManager()


@pytest.fixture
def pooler_config() -> FakePoolerConfig:
    """PgBouncer configured for SCRAM."""
    return FakePoolerConfig()


@pytest.fixture
def privilege_checker() -> FakePrivilegeChecker:
    """A privileged caller."""
    return FakePrivilegeChecker()


@pytest.fixture
def make_use_case(
    catalog: FakeCatalog,
    service: FakeServiceManager,
    pooler_config: FakePoolerConfig,
    store: FileUserlistStore,
    privilege_checker: FakePrivilegeChecker,
):
    """Factory building the use case from the fixtures, with overridable options."""

    def _make(**options) -> SyncUserlist:
        return SyncUserlist(
            catalog=catalog,
            service=service,
            pooler_config=pooler_config,
            store=store,
            privilege_checker=privilege_checker,
            normalizer=SecretNormalizer(),
            restart_timeout=0.1,
            restart_poll_interval=0.01,
            **options,
        )

    return _make


@pytest.fixture
def make_row():
    """Factory for catalog rows."""
    return row
