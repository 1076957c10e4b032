"""Models for recorded unit test outcomes."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, kw_only=True)
class OutcomeRecord:
    """Outcome of one executed test case, ready for the result store.

    Start and end are synthetic: the report only carries durations, so they
    are laid out back to back from the run timestamp.
    """

    test_name: str
    passed: bool
    detail: str
    start_time: datetime
    end_time: datetime
    group_name: str = ""

    @property
    def duration(self) -> float:
        """Elapsed seconds between start and end."""
        return (self.end_time - self.start_time).total_seconds()

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "group_name": self.group_name,
            "test_name": self.test_name,
            "passed": self.passed,
            "detail": self.detail,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
        }
