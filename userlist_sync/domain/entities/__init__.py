"""Domain entities - Objects with identity and lifecycle."""

from .catalog_row import CatalogRow
from .credential_record import CredentialRecord
from .sync_report import SyncReport
from .userlist import Userlist

__all__ = [
    "CatalogRow",
    "CredentialRecord",
    "SyncReport",
    "Userlist",
]
