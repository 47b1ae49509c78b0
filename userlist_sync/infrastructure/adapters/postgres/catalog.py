"""PostgreSQL authentication catalog implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

import psycopg
from psycopg.rows import dict_row

from ....application.exceptions import CatalogError
from ....domain.entities import CatalogRow

logger = logging.getLogger(__name__)

DEFAULT_DSN = "host=/var/run/postgresql dbname=postgres user=postgres"


@dataclass(frozen=True, slots=True)
class PostgresConfig:
    """Connection settings for the source database."""

    dsn: str = DEFAULT_DSN
    connect_timeout: int = 5


class PostgresAuthCatalog:
    """
    Authentication catalog backed by ``pg_authid``.

    Implements the AuthCatalog port. Reading ``pg_authid`` requires a
    superuser connection.
    """

    PING_QUERY: ClassVar[str] = "SELECT 1"
    PASSWORD_ENCRYPTION_QUERY: ClassVar[str] = "SHOW password_encryption"
    LOGIN_CREDENTIALS_QUERY: ClassVar[str] = """
        SELECT rolname AS username,
               rolpassword AS secret_hash,
               rolcanlogin AS can_login,
               current_setting('password_encryption') AS password_encryption
        FROM pg_authid
        WHERE rolcanlogin AND rolpassword IS NOT NULL
        ORDER BY rolname
    """

    def __init__(self, config: PostgresConfig) -> None:
        """Initialize the catalog with connection settings."""
        self._config = config

    async def ping(self) -> None:
        """Run a trivial query to prove the server answers."""
        await self._fetch_all(self.PING_QUERY)
        logger.info("PostgreSQL is reachable")

    async def get_password_encryption(self) -> str:
        """Return the server's ``password_encryption`` setting."""
        rows = await self._fetch_all(self.PASSWORD_ENCRYPTION_QUERY)
        if not rows:
            msg = "SHOW password_encryption returned no rows"
            raise CatalogError(msg)
        return str(rows[0]["password_encryption"]).strip()

    async def fetch_login_credentials(self) -> list[CatalogRow]:
        """Retrieve login-capable roles with a stored secret, ordered by name."""
        rows = await self._fetch_all(self.LOGIN_CREDENTIALS_QUERY)
        logger.debug("pg_authid returned %d rows", len(rows))
        return [self._map_row(row) for row in rows]

    async def _fetch_all(self, query: str) -> list[dict[str, Any]]:
        """Open a short-lived connection, run ``query`` and return every row."""
        try:
            async with await psycopg.AsyncConnection.connect(
                self._config.dsn,
                connect_timeout=self._config.connect_timeout,
                autocommit=True,
                row_factory=dict_row,
            ) as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query)
                    return await cur.fetchall()
        except psycopg.Error as e:
            msg = f"{e.__class__.__name__}: {e}".strip()
            raise CatalogError(msg) from e

    @staticmethod
    def _map_row(row: dict[str, Any]) -> CatalogRow:
        """Map a database row to a catalog row."""
        return CatalogRow(
            username=row["username"],
            secret_hash=row["secret_hash"],
            can_login=bool(row["can_login"]),
            password_encryption=row.get("password_encryption") or "",
        )
