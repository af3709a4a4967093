from __future__ import annotations

"""
Picker Logging Settings.

The CLI starts with a WARNING console on stderr and switches to the
configured level (and the optional rotating file in the user data
directory) once config.json has been validated.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Values accepted for the 'log_level' config key
LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging sinks for one CLI run.

    Attributes:
        level: Name from LOG_LEVELS; '--debug' forces DEBUG.
        console: Write records to stderr, keeping stdout for the tree and JSON.
        log_file: Rotating log path, set when 'log_to_file' is enabled.
        max_bytes: Size that triggers a rollover of the log file.
        backup_count: Rolled files kept next to the active one.
        console_fmt: Terse stderr format.
        file_fmt: File format with timestamp and logger name.
        datefmt: Timestamp format for file entries.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
