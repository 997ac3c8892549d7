"""
Logging configuration for IPOwner.

Console logging goes to stderr so result lines on stdout stay clean.
File logging is optional, rotates, and tags every line with the address
being resolved when it was written.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Iterator


NO_ADDRESS = "-"

_current_address: ContextVar[str] = ContextVar("ipowner_address", default=NO_ADDRESS)


@contextmanager
def address_context(address: str) -> Iterator[None]:
    """Attribute log records emitted inside the block to ``address``."""
    token = _current_address.set(address)
    try:
        yield
    finally:
        _current_address.reset(token)


class AddressFilter(logging.Filter):
    """Add the address under resolution to each record as ``address``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "address"):
            record.address = _current_address.get()
        return True


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_dir: str | None = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    enable_console: bool = True,
    enable_file: bool = False,
) -> logging.Logger:
    """
    Set up logging for IPOwner.

    Args:
        level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file path (overrides log_dir, implies enable_file)
        log_dir: Directory for log files (defaults to ~/.ipowner/logs)
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep
        enable_console: Log to stderr
        enable_file: Log to a file, always at DEBUG

    Returns:
        Configured package logger
    """
    console_level = getattr(logging, level.upper())
    write_file = enable_file or bool(log_file)

    logger = logging.getLogger("ipowner")
    logger.setLevel(logging.DEBUG if write_file else console_level)
    logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if write_file:
        if log_file:
            log_path = Path(log_file).expanduser()
        elif log_dir:
            log_path = Path(log_dir) / "ipowner.log"
        else:
            log_path = Path.home() / ".ipowner" / "logs" / "ipowner.log"

        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(AddressFilter())
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(address)-15s | '
                '%(name)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    # Keep records out of the root logger's handlers
    logger.propagate = False

    return logger
