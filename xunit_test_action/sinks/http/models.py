"""Pydantic models for the result-store API."""

from datetime import datetime

from pydantic import BaseModel

from xunit_test_action.models.result import OutcomeRecord


class UnitTestResultRequest(BaseModel):
    """Body of a unit test result submission."""

    group_name: str
    test_name: str
    passed: bool
    detail: str
    start_time: datetime
    end_time: datetime

    @classmethod
    def from_outcome(cls, outcome: OutcomeRecord) -> "UnitTestResultRequest":
        """Build the request body for an outcome."""
        return cls(
            group_name=outcome.group_name,
            test_name=outcome.test_name,
            passed=outcome.passed,
            detail=outcome.detail,
            start_time=outcome.start_time,
            end_time=outcome.end_time,
        )
