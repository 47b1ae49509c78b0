"""PostgreSQL authentication catalog adapter."""

from .catalog import PostgresAuthCatalog, PostgresConfig

__all__ = ["PostgresAuthCatalog", "PostgresConfig"]
