"""Use case for synchronizing the PgBouncer userlist from the catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ...domain.entities import CredentialRecord, Userlist
from ...domain.exceptions import (
    InvalidCredentialRecordError,
    InvalidSecretError,
    UserlistFormatError,
)
from ...domain.services import SecretNormalizer, sanitize, sanitize_line
from ...domain.value_objects import AuthMethod, SoftwareVersion, SyncOutcome
from ..exceptions import (
    ApplyError,
    CatalogError,
    CompatibilityWarning,
    FetchError,
    PreconditionError,
    RestartError,
    SanitizeError,
    ServiceControlError,
)

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities import CatalogRow
    from ..ports import (
        AuthCatalog,
        PoolerConfig,
        PrivilegeChecker,
        ServiceManager,
        UserlistStore,
    )

logger = logging.getLogger(__name__)

DEFAULT_MIN_POOLER_VERSION = SoftwareVersion((1, 18, 0))


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Result of the userlist sync use case."""

    outcome: SyncOutcome
    userlist: Userlist
    backup_path: Path | None = None
    restarted: bool = False
    dry_run: bool = False
    warnings: list[CompatibilityWarning] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        """Number of records in the rendered userlist."""
        return len(self.userlist)


class SyncUserlist:
    """
    Use case for rebuilding ``userlist.txt`` from the authentication catalog.

    Runs preflight checks, advisory compatibility checks, fetches and
    normalizes credentials, applies the file atomically when its content
    changed and restarts the pooler if it was running.
    """

    def __init__(
        self,
        catalog: AuthCatalog,
        service: ServiceManager,
        pooler_config: PoolerConfig,
        store: UserlistStore,
        privilege_checker: PrivilegeChecker,
        normalizer: SecretNormalizer,
        *,
        min_pooler_version: SoftwareVersion = DEFAULT_MIN_POOLER_VERSION,
        restart_timeout: float = 10.0,
        restart_poll_interval: float = 0.5,
        strict_secret_validation: bool = True,
        dry_run: bool = False,
    ) -> None:
        """
        Initialize the use case.

        Args:
            catalog: Adapter for the source authentication catalog.
            service: Adapter controlling the pooler service.
            pooler_config: Adapter reading the pooler's configuration.
            store: Adapter owning the userlist file.
            privilege_checker: Adapter checking for elevated privilege.
            normalizer: Secret re-tagging service.
            min_pooler_version: Oldest pooler version not warned about.
            restart_timeout: Seconds to wait for the service after restart.
            restart_poll_interval: Seconds between activity checks.
            strict_secret_validation: Reject secrets that are not full verifiers.
            dry_run: If True, report changes without writing or restarting.
        """
        self._catalog = catalog
        self._service = service
        self._pooler_config = pooler_config
        self._store = store
        self._privilege_checker = privilege_checker
        self._normalizer = normalizer
        self._min_pooler_version = min_pooler_version
        self._restart_timeout = restart_timeout
        self._restart_poll_interval = restart_poll_interval
        self._strict = strict_secret_validation
        self._dry_run = dry_run

    async def execute(self) -> SyncResult:
        """
        Execute the userlist sync.

        Returns:
            SyncResult describing what changed.

        Raises:
            PreconditionError: If privilege, binary or database checks fail.
            FetchError: If the catalog yields no usable credentials.
            SanitizeError: If a credential cannot be written as a userlist line.
            ApplyError: If the file cannot be replaced.
            RestartError: If the service does not return after restart.
        """
        logger.info("Starting PgBouncer userlist update")

        await self._preflight()
        warnings = await self._check_compatibility()

        logger.info("Extracting user credentials from PostgreSQL")
        pairs = await self._fetch()
        userlist = self._sanitize(pairs)
        logger.info("Prepared %d userlist entries", len(userlist))

        outcome, backup_path = self._apply(userlist)

        restarted = False
        if outcome == SyncOutcome.UPDATED:
            restarted = await self._restart()

        logger.info("PgBouncer userlist update completed successfully")
        return SyncResult(
            outcome=outcome,
            userlist=userlist,
            backup_path=backup_path,
            restarted=restarted,
            dry_run=self._dry_run,
            warnings=warnings,
        )

    async def _preflight(self) -> None:
        """Verify privilege, pooler installation and database reachability."""
        if not self._privilege_checker.is_privileged():
            msg = "This tool must be run as root or with sudo"
            raise PreconditionError(msg)

        if not self._service.is_installed():
            msg = "PgBouncer is not installed"
            raise PreconditionError(msg)

        try:
            await self._catalog.ping()
        except CatalogError as e:
            msg = f"PostgreSQL is not reachable: {e}"
            raise PreconditionError(msg) from e

        if not await self._service.is_active():
            logger.warning("PgBouncer service is not running")

    async def _check_compatibility(self) -> list[CompatibilityWarning]:
        """Collect advisory warnings about hash format support."""
        warnings: list[CompatibilityWarning] = []
        expected = AuthMethod.SCRAM_SHA_256

        try:
            encryption = await self._catalog.get_password_encryption()
        except CatalogError as e:
            warnings.append(CompatibilityWarning(f"Unable to read PostgreSQL password_encryption: {e}"))
        else:
            if AuthMethod.parse(encryption) != expected:
                warnings.append(
                    CompatibilityWarning(
                        f"PostgreSQL password encryption is not {expected} (found: {encryption or 'unset'})"
                    )
                )

        auth_type = self._pooler_config.get_auth_type()
        if AuthMethod.parse(auth_type) != expected:
            warnings.append(
                CompatibilityWarning(
                    f"PgBouncer auth_type is not set to {expected} (found: {auth_type or 'unset'})"
                )
            )

        try:
            version = SoftwareVersion.parse(await self._service.get_version())
        except (ServiceControlError, ValueError) as e:
            warnings.append(CompatibilityWarning(f"Unable to determine PgBouncer version: {e}"))
        else:
            if version < self._min_pooler_version:
                warnings.append(
                    CompatibilityWarning(
                        f"PgBouncer version {version} may not support {expected}; "
                        f"{self._min_pooler_version} or higher is recommended"
                    )
                )

        for warning in warnings:
            logger.warning("%s", warning)
        return warnings

    async def _fetch(self) -> list[tuple[str, str]]:
        """Fetch eligible roles and normalize their secrets."""
        try:
            rows = await self._catalog.fetch_login_credentials()
        except CatalogError as e:
            msg = f"Failed to retrieve user credentials from PostgreSQL: {e}"
            raise FetchError(msg) from e

        eligible = sorted((r for r in rows if r.is_eligible), key=lambda r: r.username)
        if not eligible:
            msg = "PostgreSQL returned no login roles with a password"
            raise FetchError(msg)

        pairs: list[tuple[str, str]] = []
        rejected: list[str] = []
        for row in eligible:
            secret = self._normalize(row)
            if secret is None:
                rejected.append(row.username)
            else:
                pairs.append((row.username, secret))

        if rejected:
            msg = (
                f"Secrets for {len(rejected)} role(s) are not valid "
                f"{self._normalizer.expected_tag} verifiers: {', '.join(rejected)}"
            )
            raise FetchError(msg)

        logger.info("Retrieved %d login roles from PostgreSQL", len(pairs))
        return pairs

    def _normalize(self, row: CatalogRow) -> str | None:
        """Return the re-tagged secret, or None if it cannot be used."""
        secret = sanitize_line(row.secret_hash or "")
        try:
            normalized = self._normalizer.normalize(secret)
        except InvalidSecretError as e:
            logger.error("Role %s: %s", row.username, e)
            return None

        if normalized != secret:
            logger.warning(
                "Role %s: re-tagged secret as %s", row.username, self._normalizer.expected_tag
            )
        if self._strict and not self._normalizer.is_valid(normalized):
            logger.error("Role %s: secret is not a %s verifier", row.username, self._normalizer.expected_tag)
            return None
        return normalized

    def _sanitize(self, pairs: list[tuple[str, str]]) -> Userlist:
        """Build the userlist, keeping usernames exactly as the catalog stores them."""
        try:
            return Userlist.from_records(
                CredentialRecord.create(username, sanitize_line(secret))
                for username, secret in pairs
            )
        except InvalidCredentialRecordError as e:
            msg = f"Malformed credential row: {e}"
            raise SanitizeError(msg) from e

    def _apply(self, userlist: Userlist) -> tuple[SyncOutcome, Path | None]:
        """Replace the file if its content differs from ``userlist``."""
        path = self._store.path
        content = userlist.to_bytes()

        try:
            current = self._store.read()
        except OSError as e:
            msg = f"Unable to read {path}: {e}"
            raise ApplyError(msg) from e

        if current == content:
            logger.info("No changes detected in %s", path)
            return SyncOutcome.UNCHANGED, None

        self._log_changes(current, userlist)

        if self._dry_run:
            logger.info("DRY RUN: Would update %s with %d entries", path, len(userlist))
            return SyncOutcome.WOULD_UPDATE, None

        try:
            backup_path = self._store.backup()
            if backup_path is not None:
                logger.info("Created backup of current userlist at %s", backup_path)
            self._store.write(content)
        except (OSError, LookupError) as e:
            msg = f"Failed to update {path}: {e}"
            raise ApplyError(msg) from e

        logger.info("Updated %s with %d entries", path, len(userlist))
        return SyncOutcome.UPDATED, backup_path

    def _log_changes(self, current: bytes | None, userlist: Userlist) -> None:
        """Log which roles were added or removed, never their secrets."""
        if current is None:
            logger.info("%s does not exist yet", self._store.path)
            return
        try:
            previous = Userlist.parse(sanitize(current.decode("utf-8")))
        except (UnicodeDecodeError, UserlistFormatError, InvalidCredentialRecordError):
            logger.warning("Existing %s could not be parsed; replacing it", self._store.path)
            return

        old_names = set(previous.usernames)
        new_names = set(userlist.usernames)
        added = sorted(new_names - old_names)
        removed = sorted(old_names - new_names)
        changed = len(new_names & old_names) - len(
            {(r.username, r.secret_hash) for r in userlist} & {(r.username, r.secret_hash) for r in previous}
        )
        logger.info(
            "Userlist changes: %d added, %d removed, %d secret(s) changed",
            len(added),
            len(removed),
            changed,
        )
        if added:
            logger.info("  Added: %s", ", ".join(added))
        if removed:
            logger.info("  Removed: %s", ", ".join(removed))

    async def _restart(self) -> bool:
        """Restart the pooler if it is running and wait for it to come back."""
        if not await self._service.is_active():
            logger.info("PgBouncer service is not running, not attempting restart")
            return False

        logger.info("Restarting PgBouncer service")
        try:
            await self._service.restart()
        except ServiceControlError as e:
            msg = f"PgBouncer service failed to restart: {e}"
            raise RestartError(msg) from e

        if not await self._service.wait_until_active(self._restart_timeout, self._restart_poll_interval):
            msg = f"PgBouncer service did not become active within {self._restart_timeout:g}s after restart"
            raise RestartError(msg)

        logger.info("PgBouncer service restarted successfully")
        return True
