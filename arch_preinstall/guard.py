"""Command guard: decides whether and how each privileged command runs.

Every decision is a function of the operation's risk tier and the execution
mode the guard was built with. The guard never terminates the process; it
returns an Outcome and leaves termination to the stage sequencer.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .lib.command import CmdResult, fmt_argv, run_cmd

logger = logging.getLogger(__name__)

FATAL_EXIT = 111
DECLINED_EXIT = 1
NOT_STARTED_RC = 127


class ExecutionMode(enum.Enum):
    SIMULATE = "simulate"
    LIVE = "live"


class RiskTier(enum.Enum):
    SAFE = "safe"
    CHECKED = "checked"
    DANGEROUS = "dangerous"


@dataclass(frozen=True)
class GuardedOperation:
    argv: Sequence[str]
    message: str
    tier: RiskTier = RiskTier.CHECKED
    input_text: Optional[str] = None
    echo: bool = True

    @property
    def command_line(self) -> str:
        return fmt_argv(self.argv)


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    message: str = ""
    exit_code: int = 0
    result: Optional[CmdResult] = field(default=None, repr=False)
    simulated: bool = False

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def terminal(self) -> bool:
        return self.kind is OutcomeKind.ABORTED

    @property
    def stdout(self) -> str:
        return self.result.stdout if self.result else ""

    @classmethod
    def success(cls, result: Optional[CmdResult] = None, *, simulated: bool = False) -> "Outcome":
        return cls(OutcomeKind.SUCCESS, result=result, simulated=simulated)

    @classmethod
    def failure(cls, message: str, result: Optional[CmdResult] = None) -> "Outcome":
        return cls(OutcomeKind.FAILURE, message=message, exit_code=result.returncode if result else 1, result=result)

    @classmethod
    def aborted(cls, reason: str, exit_code: int = FATAL_EXIT, result: Optional[CmdResult] = None) -> "Outcome":
        return cls(OutcomeKind.ABORTED, message=reason, exit_code=exit_code, result=result)


Runner = Callable[..., CmdResult]
Gate = Callable[[], bool]


class Guard:
    def __init__(self, mode: ExecutionMode, *, gate: Gate, runner: Runner = run_cmd):
        self.mode = mode
        self._gate = gate
        self._runner = runner

    @property
    def simulate(self) -> bool:
        return self.mode is ExecutionMode.SIMULATE

    def _execute(self, op: GuardedOperation) -> CmdResult:
        try:
            return self._runner(op.argv, input_text=op.input_text, echo=op.echo)
        except OSError as e:
            logger.error("%s: %s", op.argv[0], e)
            return CmdResult(argv=list(op.argv), returncode=NOT_STARTED_RC, stdout="", stderr=str(e))

    def _announce(self, op: GuardedOperation) -> None:
        logger.warning(" > # %s", op.command_line)

    def run_checked(self, op: GuardedOperation) -> Outcome:
        """Run op; a non-zero exit is reported and handed back to the caller."""

        r = self._execute(op)
        if r.returncode != 0:
            logger.error("%s", op.message)
            return Outcome.failure(op.message, r)
        return Outcome.success(r)

    def run_or_die(self, op: GuardedOperation) -> Outcome:
        """Run op; a non-zero exit ends the session with FATAL_EXIT."""

        r = self._execute(op)
        if r.returncode != 0:
            logger.error("cannot %s (exit %s)", op.command_line, r.returncode)
            logger.error("%s", op.message)
            return Outcome.aborted(op.message, FATAL_EXIT, r)
        return Outcome.success(r)

    def run_guarded_by_mode(self, op: GuardedOperation) -> Outcome:
        if self.simulate:
            self._announce(op)
            return Outcome.success(simulated=True)
        return self.run_or_die(op)

    def run_dangerous(self, op: GuardedOperation) -> Outcome:
        self._announce(op)
        if self.simulate:
            return Outcome.success(simulated=True)
        if not self._gate():
            return Outcome.aborted(f"declined: {op.command_line}", FATAL_EXIT)
        return self.run_or_die(op)

    def run(self, op: GuardedOperation) -> Outcome:
        if op.tier is RiskTier.SAFE:
            return self.run_checked(op)
        if op.tier is RiskTier.DANGEROUS:
            return self.run_dangerous(op)
        return self.run_guarded_by_mode(op)
