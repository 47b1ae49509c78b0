"""Application ports - Interfaces for external adapters."""

from .auth_catalog import AuthCatalog
from .pooler_config import PoolerConfig
from .privilege_checker import PrivilegeChecker
from .report_sender import ReportSender
from .service_manager import ServiceManager
from .userlist_store import UserlistStore

__all__ = [
    "AuthCatalog",
    "PoolerConfig",
    "PrivilegeChecker",
    "ReportSender",
    "ServiceManager",
    "UserlistStore",
]
