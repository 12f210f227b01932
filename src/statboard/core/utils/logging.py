"""
Logging configuration using loguru.

The CLI calls setup_logging() once at startup; library modules just
``from loguru import logger``.  The HTTP stack (urllib3, requests-oauthlib)
logs through the standard library, so those records are forwarded into loguru
as well, which makes connection reuse visible at DEBUG.  requests-oauthlib is
never forwarded below INFO.
"""

import logging
import sys

from loguru import logger

FORWARDED_LOGGERS = ("urllib3", "requests_oauthlib")
# requests-oauthlib prints tokens and the refresh body (client secret) at DEBUG.
REDACTED_LOGGERS = ("requests_oauthlib",)


class _ForwardToLoguru(logging.Handler):
    """Re-emit stdlib log records through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(exception=record.exc_info).log(level, f"{record.name}: {record.getMessage()}")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Configure loguru with console and optional file output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR), case-insensitive.
        log_file: Path to log file. If None or empty, only logs to stderr.
        fmt: Loguru format string for the console.
        rotation: Log file rotation size.
        retention: How long to keep rotated logs.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}",
            rotation=rotation,
            retention=retention,
        )

    handler = _ForwardToLoguru()
    level_no = logging.getLevelNamesMapping().get(level, logging.DEBUG)
    for name in FORWARDED_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [handler]
        if name in REDACTED_LOGGERS:
            stdlib_logger.setLevel(max(level_no, logging.INFO))
        else:
            stdlib_logger.setLevel(level_no)
        stdlib_logger.propagate = False
