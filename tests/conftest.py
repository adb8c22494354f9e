import io
from typing import Dict, List, Sequence, Tuple

import pytest

from arch_preinstall.config import InstallConfig
from arch_preinstall.guard import ExecutionMode, Guard
from arch_preinstall.lib.command import CmdResult
from arch_preinstall.pipeline import InstallContext
from arch_preinstall.prompts import Operator
from arch_preinstall.state import ProvisioningState


class RecordingRunner:
    """Stands in for run_cmd: records argv, never touches the system."""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.inputs: List[str] = []
        self.quiet: List[List[str]] = []
        self.failures: Dict[Tuple[str, ...], int] = {}
        self.outputs: Dict[Tuple[str, ...], str] = {}

    def fail(self, *prefix: str, rc: int = 1) -> None:
        self.failures[prefix] = rc

    def output(self, *prefix: str, text: str) -> None:
        self.outputs[prefix] = text

    def _lookup(self, table, argv):
        for prefix, value in table.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return value
        return None

    def __call__(self, argv: Sequence[str], *, input_text=None, echo=True, **kwargs) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        if input_text is not None:
            self.inputs.append(input_text)
        if not echo:
            self.quiet.append(argv)
        rc = self._lookup(self.failures, argv) or 0
        out = self._lookup(self.outputs, argv) or ""
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    def invoked(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def make_ctx(runner):
    def _make(mode=ExecutionMode.SIMULATE, answers="", config=None, **state):
        operator = Operator(stdin=io.StringIO(answers), stdout=io.StringIO())
        guard = Guard(mode, gate=operator.confirm, runner=runner)
        return InstallContext(
            config=config or InstallConfig(),
            guard=guard,
            operator=operator,
            state=ProvisioningState(**state),
        )

    return _make
