"""
Logging Configuration for PV Derating.

A run prints a short banner, possibly a pairing warning and the report
path. The console therefore shows bare messages, with a level prefix only
for warnings and errors. Log files get timestamped text or JSON records.

Environment variables (used when the matching argument is not given):
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
- LOG_FILE: path of a log file; no file logging when unset
- LOG_FORMAT: 'text' or 'json'
- LOG_ROTATION, LOG_MAX_SIZE_MB, LOG_BACKUP_COUNT: file rotation
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter for report runs.

    INFO and DEBUG records are printed as the bare message so the banner
    lines read as plain output. WARNING and above get a ``LEVEL:`` prefix,
    coloured when writing to a terminal.
    """

    COLORS = {
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = False):
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno < logging.WARNING:
            return message

        prefix = f"{record.levelname}:"
        if self.use_color:
            color = self.COLORS.get(record.levelname, "")
            prefix = f"{color}{prefix}{self.RESET}"
        return f"{prefix} {message}"


def get_log_level(level_str: str) -> int:
    """Convert log level string to logging constant."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return levels.get(level_str.upper(), logging.INFO)


def _file_handler(
    log_file: str,
    enable_rotation: bool,
    max_size_mb: int,
    backup_count: int,
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if enable_rotation:
        return logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
    return logging.FileHandler(log_path, encoding="utf-8")


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_rotation: bool = True,
    max_size_mb: int = 10,
    backup_count: int = 5,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Configure the root logger for a report run.

    Args:
        log_level: Logging level name
        log_file: Log file path (default: LOG_FILE, else no file)
        log_format: 'text' or 'json'; applies to the file, and to the
            console as well when 'json'
        enable_rotation: Rotate the log file
        max_size_mb: Maximum log file size in MB before rotation
        backup_count: Number of rotated files to keep
        enable_console: Log to stdout

    Returns:
        Root logger instance
    """
    log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE")
    log_format = (log_format or os.getenv("LOG_FORMAT", "text")).lower()
    enable_rotation = str(os.getenv("LOG_ROTATION", str(enable_rotation))).lower() == "true"
    max_size_mb = int(os.getenv("LOG_MAX_SIZE_MB", max_size_mb))
    backup_count = int(os.getenv("LOG_BACKUP_COUNT", backup_count))

    level = get_log_level(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        if log_format == "json":
            console_handler.setFormatter(JSONFormatter())
        else:
            console_handler.setFormatter(ConsoleFormatter(use_color=sys.stdout.isatty()))
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    if log_file:
        file_handler = _file_handler(log_file, enable_rotation, max_size_mb, backup_count)
        if log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


# Component loggers
def get_calc_logger() -> logging.Logger:
    """Logger for efficiency and report calculations."""
    return logging.getLogger("pv_derating.calculations")


def get_export_logger() -> logging.Logger:
    """Logger for CSV report export."""
    return logging.getLogger("pv_derating.exports")


def get_data_logger() -> logging.Logger:
    """Logger for station data loading."""
    return logging.getLogger("pv_derating.data_input")
