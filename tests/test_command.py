import io
import sys

from arch_preinstall.guard import ExecutionMode, Guard, GuardedOperation, RiskTier
from arch_preinstall.lib import command
from arch_preinstall.output_sink import OutputSink


def test_run_cmd_streams_and_captures(capsys):
    r = command.run_cmd(["sh", "-c", "echo out; echo err >&2; exit 3"])

    assert r.returncode == 3
    assert r.stdout == "out\n"
    assert r.stderr == "err\n"
    captured = capsys.readouterr()
    assert captured.out == "out\n"
    assert captured.err == "err\n"


def test_run_cmd_feeds_input_text(capsys):
    r = command.run_cmd(["cat"], input_text="hello\n")

    assert r.returncode == 0
    assert r.stdout == "hello\n"
    assert capsys.readouterr().out == "hello\n"


def test_run_cmd_partial_line_is_not_held_back(capsys):
    r = command.run_cmd(["printf", "Enter passphrase: "])
    assert r.stdout == "Enter passphrase: "
    assert capsys.readouterr().out == "Enter passphrase: "


def test_fmt_argv_quotes():
    assert command.fmt_argv(["parted", "/dev/sda", "mkpart", "my root"]) == "parted /dev/sda mkpart 'my root'"


BIG = "x" * (1 << 20)


def test_run_cmd_large_input_through_tee(capsys):
    r = command.run_cmd(["tee", "/dev/null"], input_text=BIG, echo=False)

    assert r.returncode == 0
    assert len(r.stdout) == len(BIG)
    assert capsys.readouterr().out == ""


def test_run_cmd_child_that_ignores_stdin():
    r = command.run_cmd(["true"], input_text=BIG)
    assert r.returncode == 0


def test_guard_sees_exit_status_of_child_that_ignores_stdin():
    guard = Guard(ExecutionMode.LIVE, gate=lambda: True, runner=command.run_cmd)
    outcome = guard.run_checked(GuardedOperation(["true"], "true failed", RiskTier.SAFE, input_text=BIG))

    assert outcome.ok
    assert outcome.result.returncode == 0


def test_run_cmd_echo_false_still_captures(capsys):
    r = command.run_cmd(["sh", "-c", "echo quiet; echo loud >&2"], echo=False)

    assert r.stdout == "quiet\n"
    assert r.stderr == "loud\n"
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_session_log_keeps_raw_bytes(tmp_path, monkeypatch):
    terminal = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    monkeypatch.setattr(sys, "stdout", terminal)

    with OutputSink(str(tmp_path)):
        r = command.run_cmd(["printf", "\\377ok\\n"])

    assert r.stdout == "\ufffdok\n"
    assert (tmp_path / "stdout.log").read_bytes() == b"\xffok\n"
    assert terminal.buffer.getvalue() == b"\xffok\n"
