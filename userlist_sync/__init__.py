"""PgBouncer userlist synchronization from the PostgreSQL authentication catalog."""

__version__ = "1.0.0"
