from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .config import InstallConfig
from .guard import DECLINED_EXIT, Guard, GuardedOperation, Outcome, RiskTier
from .logging_utils import SUCCESS
from .prompts import Operator
from .state import ProvisioningState

logger = logging.getLogger(__name__)


class SessionAbort(Exception):
    """Ends the provisioning session with the given exit status."""

    def __init__(self, exit_code: int, reason: str = ""):
        super().__init__(reason or f"aborted with status {exit_code}")
        self.exit_code = exit_code
        self.reason = reason


@dataclass
class InstallContext:
    config: InstallConfig
    guard: Guard
    operator: Operator
    state: ProvisioningState = field(default_factory=ProvisioningState)

    def require(self, outcome: Outcome) -> Outcome:
        if outcome.terminal:
            raise SessionAbort(outcome.exit_code, outcome.message)
        return outcome

    def abort(self, reason: str = "", exit_code: int = DECLINED_EXIT) -> None:
        raise SessionAbort(exit_code, reason)

    def checked(self, argv: Sequence[str], message: str) -> Outcome:
        """SAFE: always runs, failures are reported and returned."""

        return self.guard.run(GuardedOperation(argv, message, RiskTier.SAFE))

    def guarded(
        self,
        argv: Sequence[str],
        message: str,
        *,
        input_text: Optional[str] = None,
        echo: bool = True,
    ) -> Outcome:
        """CHECKED: simulated in rehearsal, fatal on failure when live."""

        return self.require(self.guard.run(GuardedOperation(argv, message, RiskTier.CHECKED, input_text, echo)))

    def dangerous(self, argv: Sequence[str], message: str) -> Outcome:
        """DANGEROUS: simulated in rehearsal, confirmed per command when live."""

        return self.require(self.guard.run(GuardedOperation(argv, message, RiskTier.DANGEROUS)))

    def write_file(self, path: str, text: str, *, append: bool = True) -> Outcome:
        """Write text through `tee` without echoing it; the body goes to the installer log."""

        argv = ["tee", "-a", path] if append else ["tee", path]
        logger.debug("Contents for %s:\n%s", path, text)
        return self.guarded(argv, f"Could not write {path}", input_text=text, echo=False)

    def mount(self, source: str, target: str, message: str) -> Outcome:
        outcome = self.guarded(["mount", source, target], message)
        self.state.record_mount(source, target)
        return outcome

    def good(self, msg: str, *args) -> None:
        logger.log(SUCCESS, msg, *args)


class Step(Protocol):
    """A single provisioning stage."""

    step_id: str

    def run(self, ctx: InstallContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: ProvisioningState
    ran_steps: List[str]


def run_pipeline(
    *,
    ctx: InstallContext,
    steps: Sequence[Step],
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order. Any SessionAbort ends the sequence."""

    ran: List[str] = []

    for step in steps:
        logger.debug("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.debug("Stopping after %s", stop_after)
            break

    return PipelineResult(state=ctx.state, ran_steps=ran)
