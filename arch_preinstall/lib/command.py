from __future__ import annotations

import codecs
import logging
import os
import selectors
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import IO, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

# Writes of at most PIPE_BUF bytes to a writable pipe never block.
_STDIN_CHUNK = 512


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def _emit(stream: IO[str], data: bytes, text: str) -> None:
    # Session streams take the raw bytes so the logs keep them unchanged.
    write_bytes = getattr(stream, "write_bytes", None)
    if write_bytes is not None:
        write_bytes(data)
    elif text:
        stream.write(text)
    stream.flush()


def _pump(proc: subprocess.Popen, input_data: Optional[bytes], echo: bool) -> tuple[str, str]:
    """Feed stdin and copy child output into sys.stdout/sys.stderr as it arrives.

    Reads raw chunks rather than lines so prompts without a trailing newline
    reach the operator immediately. stdin is written from the same loop so a
    child that echoes its input (tee, cat) cannot fill its stdout pipe while
    we block on its stdin.
    """

    sel = selectors.DefaultSelector()
    captured = {"out": [], "err": []}
    for name, pipe in (("out", proc.stdout), ("err", proc.stderr)):
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        sel.register(pipe, selectors.EVENT_READ, (name, decoder))

    offset = 0
    if proc.stdin is not None:
        if input_data:
            sel.register(proc.stdin, selectors.EVENT_WRITE, ("in", None))
        else:
            proc.stdin.close()

    while sel.get_map():
        for key, _ in sel.select():
            name, decoder = key.data
            if name == "in":
                try:
                    offset += os.write(key.fd, input_data[offset : offset + _STDIN_CHUNK])
                except BrokenPipeError:
                    # The child exited or closed stdin without reading everything.
                    offset = len(input_data)
                if offset >= len(input_data):
                    sel.unregister(key.fileobj)
                    key.fileobj.close()
                continue

            chunk = os.read(key.fd, 32768)
            final = not chunk
            text = decoder.decode(chunk, final=final)
            if text:
                captured[name].append(text)
            if chunk and echo:
                _emit(sys.stdout if name == "out" else sys.stderr, chunk, text)
            if final:
                sel.unregister(key.fileobj)
                key.fileobj.close()

    sel.close()
    return "".join(captured["out"]), "".join(captured["err"])


def run_cmd(
    argv: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    echo: bool = True,
) -> CmdResult:
    """Run a command, streaming its output to the session streams.

    - Always logs the command (DEBUG, so it lands in the installer log).
    - stdin is inherited unless input_text is given, so interactive tools work.
    - stdout/stderr are captured in the result, and echoed live unless echo=False.
    """

    argv_list = list(argv)
    logger.debug("CMD %s", fmt_argv(argv_list))

    p = subprocess.Popen(
        argv_list,
        stdin=subprocess.PIPE if input_text is not None else None,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )

    input_data = input_text.encode("utf-8") if input_text is not None else None
    try:
        stdout, stderr = _pump(p, input_data, echo)
    except BaseException:
        p.kill()
        p.wait()
        raise
    returncode = p.wait()
    logger.debug("RC %s for %s", returncode, fmt_argv(argv_list))

    return CmdResult(argv=argv_list, returncode=returncode, stdout=stdout, stderr=stderr)
