"""xUnit test action: run the console runner and record its results."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from xunit_test_action.agents.base import Agent
from xunit_test_action.errors import ExecutableNotFoundError, ProcessExecutionError
from xunit_test_action.models.configuration import (
    XUnitActionConfig,
    XUnitExtensionConfig,
)
from xunit_test_action.models.context import ExecutionContext
from xunit_test_action.models.result import OutcomeRecord
from xunit_test_action.outcome_mapper import map_outcomes
from xunit_test_action.paths import (
    PLUGIN_INSTALL_DIR,
    resolve_executable_path,
    resolve_output_path,
)
from xunit_test_action.report_parser import load_report
from xunit_test_action.sinks.base import ResultSink

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class XUnitTestAction:
    """Runs xUnit tests on a project, assembly or xUnit file."""

    config: XUnitActionConfig
    extension: XUnitExtensionConfig = field(default_factory=XUnitExtensionConfig)
    agent: Agent
    sink: ResultSink
    plugin_install_dir: Path = PLUGIN_INSTALL_DIR

    def resolve_executable(self, context: ExecutionContext) -> Path:
        """Resolve the runner executable for the given context."""
        return resolve_executable_path(
            self.config.exe_path,
            self.extension.console_exe_path,
            self.config.framework_version,
            self.plugin_install_dir,
            lambda path: self.agent.get_working_directory(context, path),
        )

    def build_arguments(self, output_path: Path) -> str:
        """Build the runner command line; /nunit selects NUnit 2 XML output."""
        return (
            f'"{self.config.test_file}" /nunit:"{output_path}" '
            f"{self.config.additional_arguments}"
        )

    async def run(self, context: ExecutionContext) -> Sequence[OutcomeRecord]:
        """Run the tests and record every executed test case.

        Args:
            context: Application, deployable and directories of this run

        Returns:
            Recorded outcomes in report order

        Raises:
            ExecutableNotFoundError: If the runner executable does not exist
            ProcessExecutionError: If the runner fails or writes no report
            ReportParseError: If the report is not well-formed XML
            ReportSchemaError: If the report lacks required structure
            ResultSinkError: If the result store rejects an outcome

        """
        log.info("%s", self.config)
        log.debug(
            "Application %d, deployable %s, source directory %s",
            context.application_id,
            context.deployable_id,
            context.source_directory,
        )

        exe_path = self.resolve_executable(context)
        output_path = resolve_output_path(
            self.config.custom_xml_output_path,
            context.source_directory,
            context.temp_directory,
            self.agent.combine_path,
        )

        log.info("XUnitExePath = '%s'", exe_path)
        log.info("TestResults Path = '%s'", output_path)

        if not await self.agent.file_exists(exe_path):
            raise ExecutableNotFoundError(exe_path)

        process = await self.agent.execute_command_line(
            exe_path,
            self.build_arguments(output_path),
            context.source_directory,
        )

        if process.terminated_abnormally:
            raise ProcessExecutionError(
                f"The xUnit runner terminated abnormally (exit code {process.exit_code})"
            )
        if process.exit_code != 0:
            # The console runner exits non-zero when tests fail
            log.warning("The xUnit runner exited with code %d", process.exit_code)

        if not await self.agent.file_exists(output_path):
            raise ProcessExecutionError(
                f"The xUnit runner exited with code {process.exit_code} "
                f"without writing {output_path}"
            )

        report = await load_report(self.agent, output_path)

        recorded: list[OutcomeRecord] = []
        for outcome in map_outcomes(
            report,
            self.config.treat_inconclusive_as_failure,
            self.config.group_name,
        ):
            await self.sink.record(outcome)
            recorded.append(outcome)

        log.info(
            "Recorded %d test result(s) from %d test case(s)",
            len(recorded),
            len(report.test_cases),
        )
        return recorded
