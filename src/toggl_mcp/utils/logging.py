"""Logging configuration for the Toggl MCP server."""

import logging
import sys
from pathlib import Path

DEFAULT_CONFIG_DIR = Path.home() / ".toggl-mcp"
LOG_FILE_NAME = "toggl-mcp.log"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that log every request, full URL included, at INFO/DEBUG
QUIET_LOGGERS = ("httpx", "httpcore")


def _configure(handler: logging.Handler, level: int, fmt: str, datefmt: str | None = None) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(log_level: int | str = logging.INFO, config_dir: Path | None = None) -> Path:
    """Route application logs to a log file and to stderr.

    stdout carries the MCP stream while serving, so nothing is logged there.
    Calling this again replaces the handlers installed by an earlier call.

    Args:
        log_level: Level as a number or a name such as "DEBUG".
        config_dir: Directory holding the log file. Defaults to ~/.toggl-mcp/

    Returns:
        Path of the log file.
    """
    level = logging.getLevelName(log_level.upper()) if isinstance(log_level, str) else log_level
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    log_dir = config_dir or DEFAULT_CONFIG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.addHandler(_configure(logging.FileHandler(log_file), level, FILE_FORMAT, DATE_FORMAT))
    root_logger.addHandler(_configure(logging.StreamHandler(sys.stderr), level, CONSOLE_FORMAT))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
