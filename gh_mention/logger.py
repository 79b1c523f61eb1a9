"""Logging setup.

One stdout handler with coloured level names, installed on the root logger
the first time it is requested. Modules obtain loggers via get_logger().
"""

from __future__ import annotations

import logging
import sys

COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[41m",
}
RESET = "\033[0m"

_initialized = False


class ColoredFormatter(logging.Formatter):
    """Formatter that paints the level name with an ANSI colour."""

    def format(self, record: logging.LogRecord) -> str:
        color = COLORS.get(record.levelname, "")
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname:<8}{RESET}"
        return super().format(record)


def setup_logging(debug: bool = False) -> None:
    """Install the console handler; later calls only adjust the level."""
    global _initialized
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if _initialized:
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Named logger; configuration is left to setup_logging()."""
    return logging.getLogger(name)
