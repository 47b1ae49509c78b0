"""systemd-backed service manager for PgBouncer."""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass

from ....application.exceptions import ServiceControlError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Service control configuration."""

    service_name: str = "pgbouncer"
    binary: str = "pgbouncer"
    systemctl: str = "systemctl"
    command_timeout: float = 30.0


class SystemdServiceManager:
    """
    Service manager implementation using ``systemctl``.

    Implements the ServiceManager port.
    """

    def __init__(self, config: ServiceConfig) -> None:
        """Initialize the service manager."""
        self._config = config

    def is_installed(self) -> bool:
        """Check if the service binary is on the PATH."""
        return shutil.which(self._config.binary) is not None

    async def get_version(self) -> str:
        """Return the output of ``<binary> --version``."""
        returncode, output = await self._run(self._config.binary, "--version")
        if returncode != 0:
            msg = f"{self._config.binary} --version exited with {returncode}: {output}"
            raise ServiceControlError(msg)
        return output

    async def is_active(self) -> bool:
        """Check ``systemctl is-active`` for the service."""
        try:
            returncode, _ = await self._run(
                self._config.systemctl, "is-active", "--quiet", self._config.service_name
            )
        except ServiceControlError as e:
            logger.warning("Unable to query %s state: %s", self._config.service_name, e)
            return False
        return returncode == 0

    async def restart(self) -> None:
        """Restart the service through systemd."""
        returncode, output = await self._run(
            self._config.systemctl, "restart", self._config.service_name
        )
        if returncode != 0:
            msg = f"systemctl restart {self._config.service_name} exited with {returncode}: {output}"
            raise ServiceControlError(msg)

    async def wait_until_active(self, timeout: float, poll_interval: float) -> bool:
        """Poll the service state until it is active or ``timeout`` elapses."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout

        while True:
            if await self.is_active():
                return True
            if loop.time() >= deadline:
                return False
            await asyncio.sleep(poll_interval)

    async def _run(self, *args: str) -> tuple[int, str]:
        """Run a command and return its exit code and combined output."""
        logger.debug("Running: %s", " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            msg = f"Unable to run {args[0]}: {e}"
            raise ServiceControlError(msg) from e

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), self._config.command_timeout)
        except TimeoutError as e:
            process.kill()
            await process.wait()
            msg = f"{args[0]} did not finish within {self._config.command_timeout:g}s"
            raise ServiceControlError(msg) from e

        return process.returncode or 0, stdout.decode("utf-8", errors="replace").strip()
