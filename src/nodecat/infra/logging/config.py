from __future__ import annotations

"""
Logging Configuration Model.

Declares the settings used to bring up the diagnostic logging subsystem
and the table mapping level names to their numeric values.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from nodecat.domain.constants import DEFAULT_LOG_LEVEL

# Level names accepted from configuration files and the environment
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
    Settings for configure_logging().

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit diagnostics on stderr.
        log_file: Optional path of a rotating diagnostic log.
        max_bytes: Size at which the log file rolls over.
        backup_count: Number of rolled-over files kept.
        console_fmt: Format of stderr records.
        file_fmt: Format of log file records.
        datefmt: Timestamp format of log file records.
    """
    level: str = DEFAULT_LOG_LEVEL
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024  # 1MB
    backup_count: int = 2

    console_fmt: str = "%(name)s %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
