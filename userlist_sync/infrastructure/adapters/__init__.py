"""Infrastructure adapters - Implementations of application ports."""

from .filesystem import FileUserlistStore
from .notifications import SlackReportSender, WebhookReportSender
from .pgbouncer import PgBouncerIniConfig, SystemdServiceManager
from .postgres import PostgresAuthCatalog
from .system import PosixPrivilegeChecker

__all__ = [
    "FileUserlistStore",
    "PgBouncerIniConfig",
    "PosixPrivilegeChecker",
    "PostgresAuthCatalog",
    "SlackReportSender",
    "SystemdServiceManager",
    "WebhookReportSender",
]
