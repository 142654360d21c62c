"""Logging configuration with stderr console and optional rotating file handlers"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def setup_logging(
    console_level: int = logging.WARNING,
    log_file: Optional[str] = None,
    file_level: int = logging.DEBUG,
):
    """
    Configure logging with up to two destinations:
    - Console: Brief logs on stderr (WARNING by default)
    - File: Detailed logs (DEBUG by default) with rotation, only if log_file is set

    stdout is reserved for command output (ranked rows, suggest sections),
    so console logging never goes there.

    Args:
        console_level: Console logging level
        log_file: Path to log file; parent directories are created
        file_level: File logging level
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, filter in handlers

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # maxBytes=10MB, keep 5 old files
        file_handler = RotatingFileHandler(
            log_path,
            mode='a',
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    # NLTK logs data lookups at INFO
    logging.getLogger("nltk").setLevel(logging.WARNING)

    logging.debug(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={log_file or 'disabled'} ({logging.getLevelName(file_level)})"
    )
