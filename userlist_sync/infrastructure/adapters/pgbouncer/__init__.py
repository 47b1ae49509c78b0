"""PgBouncer service and configuration adapters."""

from .ini_config import PgBouncerIniConfig
from .service_manager import ServiceConfig, SystemdServiceManager

__all__ = ["PgBouncerIniConfig", "ServiceConfig", "SystemdServiceManager"]
