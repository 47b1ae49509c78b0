"""Port for controlling the dependent service - driven/secondary port."""

from typing import Protocol


class ServiceManager(Protocol):
    """
    Port for inspecting and restarting the connection pooler service.
    """

    def is_installed(self) -> bool:
        """Check if the service binary is installed."""
        ...

    async def get_version(self) -> str:
        """
        Return the raw version output of the service binary.

        Raises:
            ServiceControlError: If the binary cannot be run.
        """
        ...

    async def is_active(self) -> bool:
        """Check if the service is currently active."""
        ...

    async def restart(self) -> None:
        """
        Restart the service.

        Raises:
            ServiceControlError: If the service manager rejects the restart.
        """
        ...

    async def wait_until_active(self, timeout: float, poll_interval: float) -> bool:
        """
        Poll until the service is active.

        Returns:
            True if the service became active within ``timeout`` seconds.
        """
        ...
