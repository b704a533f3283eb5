"""
Result sinks - where pass/fail signals and diagnostics go.

The verification engine never raises for a failing case when driven
through run_one/run_all; it reports to a sink instead. CollectingSink keeps
everything in memory so a test runner (or the CLI) can decide afterwards.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ContextManager, Iterator, List, Protocol, Tuple

from gqlverify.utils.logger import get_logger

logger = get_logger(__name__)


class ResultSink(Protocol):
    """Failure, log and subtest primitives of an enclosing test runner."""

    def log(self, message: str) -> None:
        ...

    def fail(self, message: str) -> None:
        ...

    def subtest(self, name: str) -> ContextManager[object]:
        ...


@dataclass
class CaseOutcome:
    """Failures and log lines recorded for one named unit of work."""

    name: str
    failures: List[str] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def used(self) -> bool:
        return bool(self.failures or self.logs)


class CollectingSink:
    """
    In-memory sink.

    Subtests nest their names with "/", e.g. "suite/2". A failure recorded
    inside a subtest belongs to that subtest only.
    """

    def __init__(self, name: str = "suite") -> None:
        self.outcomes: List[CaseOutcome] = [CaseOutcome(name)]
        self._stack: List[CaseOutcome] = [self.outcomes[0]]

    @property
    def current(self) -> CaseOutcome:
        return self._stack[-1]

    def log(self, message: str) -> None:
        self.current.logs.append(message)
        logger.debug(message, operation="log", context={"unit": self.current.name})

    def fail(self, message: str) -> None:
        self.current.failures.append(message)
        logger.warning(
            "Test case failed",
            operation="fail",
            context={"unit": self.current.name},
            error=message.splitlines()[0] if message else "",
        )

    @contextmanager
    def subtest(self, name: str) -> Iterator[CaseOutcome]:
        outcome = CaseOutcome(f"{self.current.name}/{name}")
        self.outcomes.append(outcome)
        self._stack.append(outcome)
        try:
            yield outcome
        finally:
            self._stack.pop()

    @property
    def failed(self) -> bool:
        return any(not outcome.passed for outcome in self.outcomes)

    def failures(self) -> List[Tuple[str, str]]:
        """All (unit name, message) pairs in recording order."""
        return [
            (outcome.name, message) for outcome in self.outcomes for message in outcome.failures
        ]

    def summary(self) -> str:
        # The root only counts as a unit when a case ran directly in it.
        units = self.outcomes[1:] or [outcome for outcome in self.outcomes[:1] if outcome.used]
        failed = sum(1 for outcome in units if not outcome.passed)
        lines = [f"{len(units) - failed} passed, {failed} failed"]
        for name, message in self.failures():
            lines.append(f"--- FAIL: {name}")
            lines.extend(f"    {line}" for line in message.splitlines())
        return "\n".join(lines)

    def assert_passed(self) -> None:
        """Raise AssertionError listing every failure, if there was one."""
        if self.failed:
            raise AssertionError(self.summary())
