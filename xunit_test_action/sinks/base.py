"""Abstract base class for result sinks."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from xunit_test_action.models.result import OutcomeRecord


@dataclass(frozen=True, kw_only=True)
class ResultSink(ABC):
    """Destination of recorded unit test outcomes."""

    @abstractmethod
    async def record(self, outcome: OutcomeRecord) -> None:
        """Durably record a single outcome.

        Args:
            outcome: Outcome of one executed test case

        Raises:
            ResultSinkError: If the result store rejects the outcome

        """
