from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
RESET = "\033[0m"

_LEVEL_COLORS = {
    SUCCESS: GREEN,
    logging.WARNING: YELLOW,
    logging.ERROR: RED,
    logging.CRITICAL: RED,
}


class ColorFormatter(logging.Formatter):
    """Operator-facing format: bare message, colored by level."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno)
        if color:
            return f"{color}{msg}{RESET}"
        return msg


class ConsoleHandler(logging.Handler):
    """Write to whatever sys.stdout/sys.stderr currently are.

    The session replaces both with tee streams, so the stream is looked up at
    emit time instead of being bound at construction.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = sys.stderr if record.levelno >= logging.ERROR else sys.stdout
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.DEBUG,
    also_console: bool = True,
) -> str:
    """Configure logging.

    All records, including every executed command line, go to the installer
    log. The console only shows INFO and above.

    Notes:
    - Writing to /var/log may not be permitted outside the live ISO. We still
      *attempt* to write there first; if it fails, we fall back to a local
      file in the working directory.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_preinstall_configured", False):
        return getattr(logger, "_preinstall_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        # Fall back to a writable location.
        chosen_path = str(Path.cwd() / "arch-preinstall.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    file_handler.setLevel(level)
    handlers.append(file_handler)

    if also_console:
        console = ConsoleHandler(level=logging.INFO)
        console.setFormatter(ColorFormatter("%(message)s"))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_preinstall_configured", True)
    setattr(logger, "_preinstall_log_path", chosen_path)
    setattr(logger, "_preinstall_handlers", handlers)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Detach and close the handlers installed by configure_logging()."""

    logger = logging.getLogger()
    for h in getattr(logger, "_preinstall_handlers", []):
        logger.removeHandler(h)
        h.close()
    for attr in ("_preinstall_configured", "_preinstall_log_path", "_preinstall_handlers"):
        if hasattr(logger, attr):
            delattr(logger, attr)
