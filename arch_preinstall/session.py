from __future__ import annotations

import logging
import signal
import sys
from contextlib import contextmanager
from typing import Iterator

from .logging_utils import DEFAULT_LOG_PATH, configure_logging, reset_logging
from .output_sink import OutputSink

logger = logging.getLogger(__name__)

FAREWELL = "\nExiting"

_HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


class CleanupHandler:
    """Prints the farewell diagnostic, at most once."""

    def __init__(self, message: str = FAREWELL):
        self.message = message
        self.fired = 0

    def fire(self) -> None:
        if self.fired:
            return
        self.fired += 1
        try:
            sys.stdout.write(self.message + "\n")
            sys.stdout.flush()
        except (OSError, ValueError):
            # A closed or broken terminal must not replace the real exit status.
            pass


def _raise_exit(signum, frame) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def session(log_dir: str = ".", log_path: str = DEFAULT_LOG_PATH) -> Iterator[CleanupHandler]:
    """Scope of one provisioning run.

    Opens the output sink, configures logging and turns SIGTERM/SIGHUP into
    SystemExit so the farewell fires on every exit path.
    """

    cleanup = CleanupHandler()
    with OutputSink(log_dir) as sink:
        previous = {sig: signal.signal(sig, _raise_exit) for sig in _HANDLED_SIGNALS}
        try:
            actual = configure_logging(log_path=log_path)
            logger.debug(
                "Session logs: stdout=%s stderr=%s installer=%s",
                sink.stdout_path,
                sink.stderr_path,
                actual,
            )
            yield cleanup
        finally:
            cleanup.fire()
            for sig, handler in previous.items():
                signal.signal(sig, handler)
            reset_logging()
