from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import InstallConfig, load_config
from .guard import ExecutionMode, Guard, Runner
from .lib.command import run_cmd
from .logging_utils import DEFAULT_LOG_PATH
from .pipeline import InstallContext, SessionAbort, Step, run_pipeline
from .prompts import Operator
from .session import session
from .steps import (
    CheckEnvironmentStep,
    CreateUserStep,
    InstallBaseStep,
    InstallBootloaderStep,
    MountBootStep,
    PartitionStep,
    PrepareRootStep,
    SyncClockStep,
)

logger = logging.getLogger(__name__)

INTERRUPTED_EXIT = 130


def build_steps() -> list[Step]:
    return [
        CheckEnvironmentStep(),
        SyncClockStep(),
        PartitionStep(),
        PrepareRootStep(),
        MountBootStep(),
        InstallBaseStep(),
        InstallBootloaderStep(),
        CreateUserStep(),
    ]


def run(
    *,
    mode: ExecutionMode,
    config: Optional[InstallConfig] = None,
    log_dir: str = ".",
    log_path: str = DEFAULT_LOG_PATH,
    stop_after: Optional[str] = None,
    operator: Optional[Operator] = None,
    runner: Runner = run_cmd,
    steps: Optional[Sequence[Step]] = None,
) -> int:
    """Run one provisioning session and return its exit status."""

    operator = operator or Operator()
    guard = Guard(mode, gate=operator.confirm, runner=runner)
    ctx = InstallContext(config=config or InstallConfig(), guard=guard, operator=operator)

    with session(log_dir=log_dir, log_path=log_path):
        logger.debug("Execution mode: %s", mode.value)
        try:
            result = run_pipeline(
                ctx=ctx,
                steps=build_steps() if steps is None else steps,
                stop_after=stop_after,
            )
        except SessionAbort as e:
            logger.debug("Session aborted (status %s): %s", e.exit_code, e.reason)
            return e.exit_code
        except KeyboardInterrupt:
            logger.error("Interrupted")
            return INTERRUPTED_EXIT
        except Exception:
            logger.exception("Installer failed")
            raise
        logger.debug("Ran steps: %s", ", ".join(result.ran_steps))
        logger.debug("Final state: %s", result.state)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="arch-preinstall")
    p.add_argument("--live", action="store_true", help="Execute commands (default: simulate and print them)")
    p.add_argument("--config", default=None, help="Path to install recipe (yaml)")
    p.add_argument("--log-dir", default=".", help="Directory for stdout.log/stderr.log")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 30_partition)")

    args = p.parse_args(argv)

    return run(
        mode=ExecutionMode.LIVE if args.live else ExecutionMode.SIMULATE,
        config=load_config(args.config),
        log_dir=args.log_dir,
        log_path=args.log,
        stop_after=args.stop_after,
    )


if __name__ == "__main__":
    raise SystemExit(main())
