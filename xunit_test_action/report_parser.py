"""Parse the NUnit 2 style XML report written by the xUnit console runner."""

import logging
import xml.etree.ElementTree as ET
from datetime import date, datetime, time
from pathlib import Path

from xunit_test_action.agents.base import Agent
from xunit_test_action.errors import ReportParseError, ReportSchemaError
from xunit_test_action.models.report import ReportDocument, TestCaseRecord

log = logging.getLogger(__name__)

RESULTS_TAG = "test-results"
TEST_CASE_TAG = "test-case"
TEST_CASE_ATTRIBUTES = ("name", "executed", "success", "result", "time")


async def load_report(agent: Agent, path: Path) -> ReportDocument:
    """Read a report file through the agent and parse it.

    Parse and schema errors are re-raised with the report path appended.
    """
    log.debug("Reading test results from %s", path)
    xml_bytes = await agent.read_file_bytes(path)
    try:
        return parse_report(xml_bytes)
    except (ReportParseError, ReportSchemaError) as exc:
        raise type(exc)(f"{exc} in {path}") from exc


def parse_report(xml_bytes: bytes) -> ReportDocument:
    """Parse report bytes into a run timestamp and ordered test cases.

    Raises:
        ReportParseError: If the document is not well-formed XML
        ReportSchemaError: If a required element or attribute is missing

    """
    try:
        root = ET.fromstring(xml_bytes)
    except ET.ParseError as exc:
        raise ReportParseError(f"Invalid XML report: {exc}") from exc

    results = root if root.tag == RESULTS_TAG else root.find(f".//{RESULTS_TAG}")
    if results is None:
        raise ReportSchemaError(f"Report has no <{RESULTS_TAG}> element")

    time_value = results.get("time")
    if time_value is None:
        raise ReportSchemaError(
            f"Missing required attribute 'time' on <{RESULTS_TAG}>"
        )
    timestamp = parse_timestamp(time_value, results.get("date"))

    test_cases = tuple(
        _read_test_case(index, element)
        for index, element in enumerate(root.iter(TEST_CASE_TAG), start=1)
    )
    return ReportDocument(timestamp=timestamp, test_cases=test_cases)


def parse_timestamp(value: str, date_value: str | None = None) -> datetime:
    """Parse the run timestamp of a report.

    Accepts an ISO 8601 date-time, or a bare time of day which is combined
    with ``date_value`` (today when absent) as NUnit 2 writes them separately.
    """
    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    try:
        clock = time.fromisoformat(text)
        day = date.fromisoformat(date_value.strip()) if date_value else date.today()
    except ValueError as exc:
        raise ReportSchemaError(
            f"Cannot parse <{RESULTS_TAG}> time '{value}' as a date-time"
        ) from exc
    return datetime.combine(day, clock)


def _read_test_case(index: int, element: ET.Element) -> TestCaseRecord:
    attributes: dict[str, str] = {}
    for attribute in TEST_CASE_ATTRIBUTES:
        value = element.get(attribute)
        if value is None:
            raise ReportSchemaError(
                f"Missing required attribute '{attribute}' on "
                f"{_describe(index, element)}"
            )
        attributes[attribute] = value

    # tostring() would otherwise include the whitespace after the element
    element.tail = None
    return TestCaseRecord(
        raw_xml=ET.tostring(element, encoding="unicode"),
        **attributes,
    )


def _describe(index: int, element: ET.Element) -> str:
    name = element.get("name")
    if name is None:
        return f"<{TEST_CASE_TAG}> #{index}"
    return f"<{TEST_CASE_TAG}> #{index} (name='{name}')"
