"""Durable log file sink."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_MODE = 0o640

logger = logging.getLogger(__name__)


def _ensure_log_file(path: Path, owner: str | None, group: str | None) -> None:
    """Create the log directory and file; a new file gets mode 0640 and the given owner."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        return

    path.touch(mode=LOG_FILE_MODE)
    os.chmod(path, LOG_FILE_MODE)
    if owner or group:
        shutil.chown(path, user=owner, group=group)


def attach_log_file(
    path: Path,
    *,
    owner: str | None = None,
    group: str | None = None,
) -> logging.Handler | None:
    """
    Append all log records to ``path`` in addition to the console.

    Args:
        path: Log file location.
        owner: Owner given to a newly created log file.
        group: Group given to a newly created log file.

    Returns:
        The attached handler, or None if the file could not be opened.
    """
    try:
        _ensure_log_file(path, owner, group)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except (OSError, LookupError) as e:
        logger.warning("Unable to open log file %s: %s", path, e)
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler
