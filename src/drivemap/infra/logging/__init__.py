from __future__ import annotations

from .config import LoggingConfig, level_from_verbosity
from .core import configure_logging, get_logger, shutdown_logging

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "level_from_verbosity",
    "shutdown_logging",
]
