from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, BinaryIO, Optional


class TeeStream:
    """Text stream writing to the terminal stream and a binary log file.

    Both sides are flushed on every write so the log and the terminal see
    interleaved stdout/stderr in real-time order. Command output arrives
    through write_bytes() and reaches the log byte-for-byte.
    """

    def __init__(self, primary: IO[str], log: BinaryIO):
        self._primary = primary
        self._log = log

    def write(self, s: str) -> int:
        n = self._primary.write(s)
        self._primary.flush()
        self._log.write(s.encode("utf-8", errors="surrogateescape"))
        self._log.flush()
        return n if n is not None else len(s)

    def write_bytes(self, data: bytes) -> None:
        raw = getattr(self._primary, "buffer", None)
        if raw is not None:
            self._primary.flush()
            raw.write(data)
            raw.flush()
        else:
            self._primary.write(data.decode("utf-8", errors="replace"))
            self._primary.flush()
        self._log.write(data)
        self._log.flush()

    def flush(self) -> None:
        self._primary.flush()
        self._log.flush()

    def isatty(self) -> bool:
        return self._primary.isatty()

    def fileno(self) -> int:
        return self._primary.fileno()

    def __getattr__(self, name: str):
        return getattr(self._primary, name)


class OutputSink:
    """Mirror sys.stdout and sys.stderr to stdout.log / stderr.log."""

    def __init__(self, log_dir: str = "."):
        self.log_dir = Path(log_dir)
        self.stdout_path = self.log_dir / "stdout.log"
        self.stderr_path = self.log_dir / "stderr.log"
        self._saved: Optional[tuple[IO[str], IO[str]]] = None
        self._files: list[BinaryIO] = []

    def __enter__(self) -> "OutputSink":
        self.log_dir.mkdir(parents=True, exist_ok=True)
        out_log = open(self.stdout_path, "wb")
        err_log = open(self.stderr_path, "wb")
        self._files = [out_log, err_log]
        self._saved = (sys.stdout, sys.stderr)
        sys.stdout = TeeStream(sys.stdout, out_log)
        sys.stderr = TeeStream(sys.stderr, err_log)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved is not None:
            sys.stdout, sys.stderr = self._saved
            self._saved = None
        for f in self._files:
            f.close()
        self._files = []
