import os
import signal
import sys

import pytest

from arch_preinstall.session import CleanupHandler, session


def test_cleanup_handler_fires_once(capsys):
    handler = CleanupHandler()
    handler.fire()
    handler.fire()
    assert capsys.readouterr().out == "\nExiting\n"
    assert handler.fired == 1


def test_cleanup_handler_survives_closed_stdout(monkeypatch):
    class Closed:
        def write(self, s):
            raise ValueError("I/O operation on closed file")

        def flush(self):
            pass

    monkeypatch.setattr(sys, "stdout", Closed())
    CleanupHandler().fire()


def test_session_logs_farewell_on_success(tmp_path):
    with session(log_dir=str(tmp_path), log_path=str(tmp_path / "installer.log")) as cleanup:
        print("working")
    text = (tmp_path / "stdout.log").read_text(encoding="utf-8")
    assert text == "working\n\nExiting\n"
    assert cleanup.fired == 1


def test_session_fires_on_exception(tmp_path):
    with pytest.raises(RuntimeError):
        with session(log_dir=str(tmp_path), log_path=str(tmp_path / "installer.log")):
            raise RuntimeError("boom")
    assert (tmp_path / "stdout.log").read_text(encoding="utf-8").count("Exiting") == 1


def test_session_turns_sigterm_into_exit(tmp_path):
    before = signal.getsignal(signal.SIGTERM)
    with pytest.raises(SystemExit) as exc:
        with session(log_dir=str(tmp_path), log_path=str(tmp_path / "installer.log")):
            os.kill(os.getpid(), signal.SIGTERM)
    assert exc.value.code == 128 + signal.SIGTERM
    assert signal.getsignal(signal.SIGTERM) == before
    assert (tmp_path / "stdout.log").read_text(encoding="utf-8").count("Exiting") == 1


def test_session_writes_installer_log(tmp_path):
    import logging

    log_path = tmp_path / "installer.log"
    with session(log_dir=str(tmp_path), log_path=str(log_path)):
        logging.getLogger("arch_preinstall.test").warning("careful")
    assert "careful" in log_path.read_text(encoding="utf-8")
    assert "careful" in (tmp_path / "stdout.log").read_text(encoding="utf-8")


def test_default_log_path_comes_from_paths():
    from arch_preinstall.lib.env import PATHS
    from arch_preinstall.logging_utils import DEFAULT_LOG_PATH

    assert DEFAULT_LOG_PATH == PATHS.log_default == "/var/log/arch-preinstall.log"
