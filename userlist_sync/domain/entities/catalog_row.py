"""Catalog row as read from the PostgreSQL authentication catalog."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CatalogRow:
    """One role from the authentication catalog."""

    username: str
    secret_hash: str | None
    can_login: bool
    password_encryption: str = ""

    @property
    def is_eligible(self) -> bool:
        """Check if the role belongs in the userlist."""
        return self.can_login and bool(self.secret_hash)
