"""Map parsed test cases to outcome records on a synthetic timeline."""

import logging
import math
import re
from collections.abc import Iterator
from datetime import timedelta

from xunit_test_action.models.report import ReportDocument, TestCaseRecord
from xunit_test_action.models.result import OutcomeRecord

log = logging.getLogger(__name__)

# Invariant culture: optional sign, "," group separators in the integral part,
# "." decimal point and an exponent, surrounded by optional whitespace.
_NUMBER_PATTERN = re.compile(
    r"\s*[+-]?(?:\d[\d,]*(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*"
)
_MAX_SECONDS = timedelta.max.total_seconds()


def parse_elapsed_seconds(value: str) -> float:
    """Parse a test duration in seconds.

    Raises:
        ValueError: If the value is not a number or not a usable duration

    """
    if not _NUMBER_PATTERN.fullmatch(value):
        raise ValueError(f"Error parsing {value} as a number.")

    seconds = float(value.strip().replace(",", ""))
    if not math.isfinite(seconds) or not 0 <= seconds <= _MAX_SECONDS:
        raise ValueError(f"Test duration {value} is out of range.")
    return seconds


def is_passed(test_case: TestCaseRecord, treat_inconclusive_as_failure: bool) -> bool:
    """Decide pass/fail, optionally letting inconclusive tests pass."""
    return test_case.succeeded or (
        not treat_inconclusive_as_failure and test_case.is_inconclusive
    )


def map_outcomes(
    report: ReportDocument,
    treat_inconclusive_as_failure: bool,
    group_name: str = "",
) -> Iterator[OutcomeRecord]:
    """Yield one outcome per executed test case, in document order.

    Each outcome starts where the previous one ended, beginning at the report
    timestamp. Skipped tests yield nothing and do not move the timeline.
    """
    cursor = report.timestamp

    for test_case in report.test_cases:
        if not test_case.was_executed:
            log.info("xUnit Test: %s (skipped)", test_case.name)
            continue

        passed = is_passed(test_case, treat_inconclusive_as_failure)

        try:
            elapsed = parse_elapsed_seconds(test_case.time)
        except ValueError as exc:
            log.warning("%s", exc)
            elapsed = 0.0

        log.info(
            "xUnit Test: %s, Result: %s, Test Length: %s secs",
            test_case.name,
            passed,
            elapsed,
        )

        end = cursor + timedelta(seconds=elapsed)
        yield OutcomeRecord(
            test_name=test_case.name,
            passed=passed,
            detail=test_case.raw_xml,
            start_time=cursor,
            end_time=end,
            group_name=group_name,
        )
        cursor = end
