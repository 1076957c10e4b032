"""Models for the runner's XML test report."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class TestCaseRecord:
    """A single ``test-case`` element with its attributes kept verbatim."""

    __test__ = False

    name: str
    executed: str
    success: str
    result: str
    time: str
    raw_xml: str

    @property
    def was_executed(self) -> bool:
        """Only an explicit ``false`` marks a test as not run."""
        return self.executed.lower() != "false"

    @property
    def succeeded(self) -> bool:
        return self.success.lower() == "true"

    @property
    def is_inconclusive(self) -> bool:
        return self.result.lower() == "inconclusive"


@dataclass(frozen=True, kw_only=True)
class ReportDocument:
    """Parsed report: run timestamp and test cases in document order."""

    timestamp: datetime
    test_cases: Sequence[TestCaseRecord]
