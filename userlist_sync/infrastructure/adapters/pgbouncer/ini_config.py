"""Reader for ``pgbouncer.ini``."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_AUTH_TYPE_PATTERN = re.compile(r"^\s*auth_type\s*=\s*(?P<value>[^\s;#]+)", re.MULTILINE)


class PgBouncerIniConfig:
    """Implements the PoolerConfig port by scanning ``pgbouncer.ini``."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def get_auth_type(self) -> str | None:
        """Return the last ``auth_type`` assignment, as PgBouncer applies it."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Unable to read %s: %s", self._path, e)
            return None

        matches = _AUTH_TYPE_PATTERN.findall(text)
        return matches[-1] if matches else None
