"""Application configuration."""

from .log_sink import LOG_FORMAT, attach_log_file
from .settings import Settings, load_settings

__all__ = [
    "LOG_FORMAT",
    "Settings",
    "attach_log_file",
    "load_settings",
]
