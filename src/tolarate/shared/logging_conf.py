# src/tolarate/shared/logging_conf.py
"""
Logging Configuration - Logging Setup and Configuration

This module provides centralized logging configuration for the job.
It sets up consistent formatting, log levels and output handlers
(stdout and/or a rotating log file) for every module.

Files that USE this module:
- tolarate.app (setup_logging function for logging initialization)

Files that this module USES:
- None (pure configuration module)
"""
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level=logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    log_stdout: Optional[bool] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure application-wide logging settings.

    Can output to stdout, a file, or both. File logging uses rotation so a
    long-lived cron setup does not grow the log without bound.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file (enables file logging)
        log_dir: Optional directory for log files (writes tolarate.log inside it)
        log_stdout: Log to stdout; None reads TOLARATE_LOG_STDOUT (default true)
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup log files to keep (default: 5)
    """
    handlers = []

    # None defers to TOLARATE_LOG_STDOUT
    if log_stdout is None:
        log_stdout = os.environ.get("TOLARATE_LOG_STDOUT", "true").lower() == "true"

    if log_stdout:
        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(stdout_handler)

    log_file_path = None
    if log_file or log_dir:
        if log_dir:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file_path = log_dir / "tolarate.log"
        else:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers.append(file_handler)

    # If no handlers specified, default to stderr so errors are never lost
    if not handlers:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handlers = [stderr_handler]

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    if log_file_path is not None:
        logger.debug("Logging configured: file=%s, level=%s", log_file_path, logging.getLevelName(level))
    else:
        logger.debug("Logging configured: stdout, level=%s", logging.getLevelName(level))
