"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from ...domain.services.secret_normalizer import DEFAULT_TAG
from ...domain.value_objects import SoftwareVersion
from ..adapters.filesystem import UserlistFileConfig
from ..adapters.notifications import SlackConfig, WebhookConfig
from ..adapters.pgbouncer import ServiceConfig
from ..adapters.postgres.catalog import DEFAULT_DSN, PostgresConfig


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    return int(os.environ.get(key, str(default)))


def _env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.environ.get(key, str(default)))


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Userlist file
    userlist_path: str = field(default_factory=lambda: _env_str("USERLIST_PATH", "/etc/pgbouncer/userlist.txt"))
    pgbouncer_user: str = field(default_factory=lambda: _env_str("PGBOUNCER_USER", "pgbouncer"))
    pgbouncer_group: str = field(default_factory=lambda: _env_str("PGBOUNCER_GROUP", "pgbouncer"))

    # PgBouncer service
    pgbouncer_service: str = field(default_factory=lambda: _env_str("PGBOUNCER_SERVICE", "pgbouncer"))
    pgbouncer_binary: str = field(default_factory=lambda: _env_str("PGBOUNCER_BINARY", "pgbouncer"))
    pgbouncer_ini_path: str = field(
        default_factory=lambda: _env_str("PGBOUNCER_INI_PATH", "/etc/pgbouncer/pgbouncer.ini")
    )
    pgbouncer_min_version: str = field(default_factory=lambda: _env_str("PGBOUNCER_MIN_VERSION", "1.18.0"))
    restart_timeout_seconds: float = field(default_factory=lambda: _env_float("RESTART_TIMEOUT_SECONDS", 10.0))
    restart_poll_interval: float = field(default_factory=lambda: _env_float("RESTART_POLL_INTERVAL", 0.5))

    # PostgreSQL
    postgres_dsn: str = field(default_factory=lambda: _env_str("POSTGRES_DSN", DEFAULT_DSN))
    postgres_connect_timeout: int = field(default_factory=lambda: _env_int("POSTGRES_CONNECT_TIMEOUT", 5))

    # Secret handling
    expected_secret_tag: str = field(default_factory=lambda: _env_str("EXPECTED_SECRET_TAG", DEFAULT_TAG))
    strict_secret_validation: bool = field(
        default_factory=lambda: _env_bool("STRICT_SECRET_VALIDATION", default=True)
    )

    # Run configuration
    log_file: str = field(
        default_factory=lambda: _env_str("LOG_FILE", "/var/log/pgbouncer/userlist_updates.log")
    )
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    dry_run: bool = field(default_factory=lambda: _env_bool("DRY_RUN"))

    # Webhook settings
    webhook_enabled: bool = field(default_factory=lambda: _env_bool("WEBHOOK_ENABLED"))
    webhook_url: str = field(default_factory=lambda: _env_str("WEBHOOK_URL"))

    # Slack settings
    slack_enabled: bool = field(default_factory=lambda: _env_bool("SLACK_ENABLED"))
    slack_webhook_url: str = field(default_factory=lambda: _env_str("SLACK_WEBHOOK_URL"))

    def validate(self) -> None:
        """Validate settings."""
        problems: list[str] = []

        if not Path(self.userlist_path).is_absolute():
            problems.append(f"USERLIST_PATH must be absolute (got {self.userlist_path!r})")
        if not self.expected_secret_tag:
            problems.append("EXPECTED_SECRET_TAG must not be empty")
        if self.restart_timeout_seconds <= 0:
            problems.append("RESTART_TIMEOUT_SECONDS must be positive")
        if self.restart_poll_interval <= 0:
            problems.append("RESTART_POLL_INTERVAL must be positive")
        if self.postgres_connect_timeout <= 0:
            problems.append("POSTGRES_CONNECT_TIMEOUT must be positive")
        try:
            SoftwareVersion.parse(self.pgbouncer_min_version)
        except ValueError:
            problems.append(f"PGBOUNCER_MIN_VERSION is not a version (got {self.pgbouncer_min_version!r})")

        if problems:
            msg = f"Invalid configuration: {'; '.join(problems)}"
            raise ValueError(msg)

    @cached_property
    def userlist_file_config(self) -> UserlistFileConfig:
        """Get userlist file configuration."""
        return UserlistFileConfig(
            path=Path(self.userlist_path),
            owner=self.pgbouncer_user or None,
            group=self.pgbouncer_group or None,
        )

    @cached_property
    def service_config(self) -> ServiceConfig:
        """Get service control configuration."""
        return ServiceConfig(
            service_name=self.pgbouncer_service,
            binary=self.pgbouncer_binary,
        )

    @cached_property
    def postgres_config(self) -> PostgresConfig:
        """Get PostgreSQL connection configuration."""
        return PostgresConfig(
            dsn=self.postgres_dsn,
            connect_timeout=self.postgres_connect_timeout,
        )

    @cached_property
    def min_pooler_version(self) -> SoftwareVersion:
        """Get the minimum PgBouncer version not warned about."""
        return SoftwareVersion.parse(self.pgbouncer_min_version)

    @cached_property
    def webhook_config(self) -> WebhookConfig:
        """Get webhook configuration."""
        return WebhookConfig(
            enabled=self.webhook_enabled,
            url=self.webhook_url,
        )

    @cached_property
    def slack_config(self) -> SlackConfig:
        """Get Slack configuration."""
        return SlackConfig(
            enabled=self.slack_enabled,
            webhook_url=self.slack_webhook_url,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
