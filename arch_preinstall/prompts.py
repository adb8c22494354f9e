from __future__ import annotations

import logging
import sys
from typing import IO, Optional

from .logging_utils import RESET, YELLOW

logger = logging.getLogger(__name__)

CONTINUE_PROMPT = f"{YELLOW}\t > Continue? [y/n] {RESET}"


class Operator:
    """Blocking operator input: single keystrokes and free-text lines.

    Prompts and echoed answers go to sys.stdout so the session log keeps a
    record of every decision. Streams are resolved at call time unless given
    explicitly.
    """

    def __init__(self, stdin: Optional[IO[str]] = None, stdout: Optional[IO[str]] = None):
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> IO[str]:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def read_char(self) -> str:
        """Read one keystroke; on piped input, the first character of a line."""

        stream = self.stdin
        if stream.isatty():
            import termios
            import tty

            fd = stream.fileno()
            saved = termios.tcgetattr(fd)
            try:
                tty.setcbreak(fd)
                return stream.read(1)
            finally:
                termios.tcsetattr(fd, termios.TCSADRAIN, saved)

        line = stream.readline()
        return line[:1] if line else ""

    def confirm(self, prompt: str = CONTINUE_PROMPT) -> bool:
        """Confirmation gate: only y/Y is a yes. No re-prompt."""

        self._write(prompt)
        choice = self.read_char()
        self._write(choice.strip() + "\n")
        ok = choice in ("y", "Y")
        logger.debug("Confirmation %r -> %s", choice, ok)
        return ok

    def choose(self, prompt: str, choices: str) -> Optional[str]:
        """Single-keystroke menu. Returns the lowercase choice or None."""

        self._write(prompt)
        choice = self.read_char()
        self._write(choice.strip() + "\n")
        picked = choice.lower()
        if not picked or picked not in choices.lower():
            logger.debug("Unrecognized choice %r (expected one of %s)", choice, choices)
            return None
        return picked

    def ask(self, prompt: str, default: str) -> str:
        """Free-text answer; empty input selects the default."""

        self._write(f"{prompt} (default {default}): ")
        line = self.stdin.readline()
        if not self.stdin.isatty():
            self._write(line if line.endswith("\n") else line + "\n")
        answer = line.strip()
        return answer or default
