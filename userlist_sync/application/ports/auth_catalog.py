"""Port for the authentication catalog - driven/secondary port."""

from typing import Protocol

from ...domain.entities import CatalogRow


class AuthCatalog(Protocol):
    """
    Port for reading roles and secrets from the source database.

    The catalog is read-only from the application's point of view.
    """

    async def ping(self) -> None:
        """
        Check the database is reachable and responding.

        Raises:
            CatalogError: If the database cannot be reached.
        """
        ...

    async def get_password_encryption(self) -> str:
        """
        Return the server's ``password_encryption`` setting.

        Raises:
            CatalogError: If the setting cannot be read.
        """
        ...

    async def fetch_login_credentials(self) -> list[CatalogRow]:
        """
        Retrieve every login-capable role with a stored secret.

        Returns:
            Rows ordered by username.

        Raises:
            CatalogError: If the query fails.
        """
        ...
