"""Port for reading the connection pooler's configuration."""

from typing import Protocol


class PoolerConfig(Protocol):
    """Port for inspecting the pooler's configured authentication mode."""

    def get_auth_type(self) -> str | None:
        """Return the configured ``auth_type``, or None when not set or unreadable."""
        ...
