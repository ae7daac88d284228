"""Shared fixtures: a scripted stand-in for CommandRunner."""

from typing import List, Sequence, Tuple

import pytest

from jj_tui.commander import Commander

REPO = "/repo"
GLOBAL_ARGS = ["--no-pager", "--color=never", "-R", REPO]


class FakeRunner:
    """Records argument vectors and returns scripted results in order.

    A scripted Exception instance is raised instead of returned.
    """

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.calls: List[Tuple[List[str], bool]] = []

    def queue(self, *results) -> None:
        self.results.extend(results)

    def run(self, args: Sequence[str], merge_stderr: bool = False) -> str:
        self.calls.append((list(args), merge_stderr))
        result = self.results.pop(0) if self.results else ""
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last_args(self) -> List[str]:
        """Arguments of the last call with the four global flags removed."""
        return self.calls[-1][0][4:]


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def commander(runner: FakeRunner) -> Commander:
    return Commander(REPO, runner=runner)
