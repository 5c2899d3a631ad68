from __future__ import annotations

"""
Logging Configuration Models.

Settings consumed by configure_logging() and the mapping from textual
severity names to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging subsystem.

    Attributes:
        level: Minimum severity captured ("DEBUG", "INFO"...).
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size of a log segment before rollover.
        backup_count: Rolled-over segments kept on disk.
        console_fmt: Format of stderr records.
        file_fmt: Format of file records.
        datefmt: Timestamp format of file records.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(name)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def level_from_verbosity(debug: bool = False, quiet: bool = False) -> str:
    """Translate CLI verbosity switches into a level name."""
    if debug:
        return "DEBUG"
    if quiet:
        return "ERROR"
    return "WARNING"
