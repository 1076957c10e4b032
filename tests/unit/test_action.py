"""Tests for the xUnit test action."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import Mock

import pytest

from xunit_test_action.action import XUnitTestAction
from xunit_test_action.errors import (
    ExecutableNotFoundError,
    ProcessExecutionError,
    ReportParseError,
    ResultSinkError,
)
from xunit_test_action.models.configuration import XUnitExtensionConfig
from xunit_test_action.models.context import ExecutionContext
from xunit_test_action.paths import BUNDLED_TOOLS_DIR, NET40_RUNNER
from xunit_test_action.sinks.base import ResultSink
from xunit_test_action.testing.agents import StubAgent
from xunit_test_action.testing.factories import XUnitActionConfigFactory
from xunit_test_action.testing.reports import case_element, results_document
from xunit_test_action.testing.sinks import CollectingResultSink

INSTALL_DIR = Path("/opt/xunit-extension")
RUNNER = Path("/tools/xunit.console.clr4.exe")
REPORT = results_document(
    [
        case_element("Tests.A", time="1.5"),
        case_element("Tests.B", executed="False", success="False"),
        case_element("Tests.C", success="False", result="Failure", time="2"),
    ],
    time="2020-01-01T00:00:00",
)


@pytest.fixture
def context() -> ExecutionContext:
    """Create an execution context with fixed directories."""
    return ExecutionContext(
        application_id=7,
        deployable_id=3,
        working_directory=Path("/work/app-7"),
        source_directory=Path("/work/app-7/src"),
        temp_directory=Path("/tmp/xunit"),
    )


@pytest.fixture
def agent() -> StubAgent:
    """Create an agent with the runner installed and a canned report."""
    return StubAgent(files={RUNNER: b"MZ"}, report=REPORT)


@pytest.fixture
def sink() -> CollectingResultSink:
    """Create an in-memory result sink."""
    return CollectingResultSink()


def make_action(
    agent: StubAgent, sink: ResultSink, **config_overrides: object
) -> XUnitTestAction:
    """Create an action using RUNNER unless overridden."""
    overrides = {"exe_path": str(RUNNER), **config_overrides}
    return XUnitTestAction(
        config=XUnitActionConfigFactory.build(**overrides),
        agent=agent,
        sink=sink,
        plugin_install_dir=INSTALL_DIR,
    )


async def test_records_executed_test_cases(
    agent: StubAgent, sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """Records one outcome per executed test case on a synthetic timeline."""
    action = make_action(agent, sink)

    outcomes = await action.run(context)

    start = datetime(2020, 1, 1)
    assert outcomes == sink.outcomes
    assert [(o.test_name, o.passed) for o in outcomes] == [
        ("Tests.A", True),
        ("Tests.C", False),
    ]
    assert outcomes[0].start_time == start
    assert outcomes[0].end_time == outcomes[1].start_time == start + timedelta(seconds=1.5)
    assert outcomes[1].end_time == start + timedelta(seconds=3.5)
    assert all(o.group_name == "Unit Tests" for o in outcomes)


async def test_builds_runner_command_line(
    agent: StubAgent, sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """Runner gets quoted test file, /nunit output flag and extra arguments."""
    action = make_action(
        agent,
        sink,
        test_file="bin/Release/Tests.dll",
        custom_xml_output_path="results.xml",
        additional_arguments="/noshadow /trait category=fast",
    )

    await action.run(context)

    assert agent.commands == [
        (
            RUNNER,
            '"bin/Release/Tests.dll" /nunit:"/work/app-7/src/results.xml" '
            "/noshadow /trait category=fast",
            context.source_directory,
        )
    ]


async def test_writes_report_to_fresh_temp_file(
    agent: StubAgent, sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """Without a custom path the report goes to a new temp file."""
    action = make_action(agent, sink)

    await action.run(context)

    report_paths = [path for path in agent.files if path != RUNNER]
    assert len(report_paths) == 1
    assert report_paths[0].parent == context.temp_directory
    assert report_paths[0].suffix == ".xml"


async def test_raises_when_runner_is_missing(
    sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """A missing runner executable aborts before launching anything."""
    agent = StubAgent(report=REPORT)
    action = make_action(agent, sink)

    with pytest.raises(ExecutableNotFoundError) as exc_info:
        await action.run(context)

    assert exc_info.value.path == str(RUNNER)
    assert agent.commands == []


async def test_existing_runner_is_launched(
    agent: StubAgent, sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """An existing runner executable does not trigger the not-found error."""
    action = make_action(agent, sink)

    await action.run(context)

    assert len(agent.commands) == 1


async def test_uses_extension_default_runner(
    sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """Extension-wide runner path is used when the action sets none."""
    runner = context.working_directory / "runners" / "xunit.console.exe"
    agent = StubAgent(files={runner: b"MZ"}, report=REPORT)
    action = XUnitTestAction(
        config=XUnitActionConfigFactory.build(),
        extension=XUnitExtensionConfig(console_exe_path="runners/xunit.console.exe"),
        agent=agent,
        sink=sink,
        plugin_install_dir=INSTALL_DIR,
    )

    await action.run(context)

    assert agent.commands[0][0] == runner


async def test_falls_back_to_bundled_runner(
    sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """Bundled runner under the install directory is the last resort."""
    bundled = INSTALL_DIR / BUNDLED_TOOLS_DIR / NET40_RUNNER
    agent = StubAgent(files={bundled: b"MZ"}, report=REPORT)
    action = XUnitTestAction(
        config=XUnitActionConfigFactory.build(),
        agent=agent,
        sink=sink,
        plugin_install_dir=INSTALL_DIR,
    )

    await action.run(context)

    assert agent.commands[0][0] == bundled


async def test_raises_when_runner_terminates_abnormally(
    sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """A runner killed by a signal aborts before parsing."""
    agent = StubAgent(files={RUNNER: b"MZ"}, report=REPORT, exit_code=-9)
    action = make_action(agent, sink)

    with pytest.raises(ProcessExecutionError, match="terminated abnormally"):
        await action.run(context)

    assert sink.outcomes == []


async def test_raises_when_report_is_missing(
    sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """A runner that writes no report raises ProcessExecutionError."""
    agent = StubAgent(files={RUNNER: b"MZ"}, report=None, exit_code=1)
    action = make_action(agent, sink)

    with pytest.raises(ProcessExecutionError, match="exited with code 1 without writing"):
        await action.run(context)


async def test_nonzero_exit_with_report_is_recorded(
    sink: CollectingResultSink,
    context: ExecutionContext,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Failing tests make the runner exit non-zero; results are still recorded."""
    agent = StubAgent(files={RUNNER: b"MZ"}, report=REPORT, exit_code=1)
    action = make_action(agent, sink)

    with caplog.at_level(logging.WARNING):
        outcomes = await action.run(context)

    assert len(outcomes) == 2
    assert "exited with code 1" in caplog.text


async def test_raises_for_malformed_report(
    sink: CollectingResultSink, context: ExecutionContext
) -> None:
    """A malformed report aborts without recording anything."""
    agent = StubAgent(files={RUNNER: b"MZ"}, report=b"<test-results")
    action = make_action(agent, sink)

    with pytest.raises(ReportParseError):
        await action.run(context)

    assert sink.outcomes == []


async def test_propagates_sink_errors(
    agent: StubAgent, context: ExecutionContext
) -> None:
    """Sink errors stop the run at the failing outcome."""
    sink = Mock(spec=ResultSink)
    sink.record.side_effect = [None, ResultSinkError("rejected")]
    action = make_action(agent, sink)

    with pytest.raises(ResultSinkError, match="rejected"):
        await action.run(context)

    assert sink.record.call_count == 2


async def test_logs_resolved_paths(
    agent: StubAgent,
    sink: CollectingResultSink,
    context: ExecutionContext,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Logs the action description and resolved paths."""
    action = make_action(agent, sink, test_file="Tests.dll")

    with caplog.at_level(logging.INFO):
        await action.run(context)

    assert "Run xUnit Unit Tests on Tests.dll" in caplog.text
    assert f"XUnitExePath = '{RUNNER}'" in caplog.text
    assert "TestResults Path = '/tmp/xunit/" in caplog.text
