"""Agent running the test runner on the local machine."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from xunit_test_action.agents.base import Agent, ProcessResult
from xunit_test_action.errors import ProcessExecutionError
from xunit_test_action.models.context import ExecutionContext

log = logging.getLogger(__name__)


def split_command_line(arguments: str) -> list[str]:
    """Split a Windows-style argument string into separate arguments.

    Whitespace outside double quotes separates arguments. Double quotes group
    text and are dropped; backslashes are kept as written, so UNC and drive
    paths pass through unchanged.

    Raises:
        ValueError: If a double quote is left open

    """
    argv: list[str] = []
    token: list[str] = []
    in_quotes = False
    in_token = False

    for char in arguments:
        if char == '"':
            in_quotes = not in_quotes
            in_token = True
        elif char.isspace() and not in_quotes:
            if in_token:
                argv.append("".join(token))
                token = []
                in_token = False
        else:
            token.append(char)
            in_token = True

    if in_quotes:
        raise ValueError("No closing quotation")
    if in_token:
        argv.append("".join(token))
    return argv


@dataclass(frozen=True, kw_only=True)
class LocalAgent(Agent):
    """Local file system and asyncio subprocesses."""

    def get_working_directory(self, context: ExecutionContext, path: str) -> Path:
        """Anchor relative paths at the context's working directory."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return (context.working_directory / candidate).absolute()

    async def file_exists(self, path: Path) -> bool:
        """Check whether a regular file exists at path."""
        return path.is_file()

    async def read_file_bytes(self, path: Path) -> bytes:
        """Return the full content of a file."""
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ProcessExecutionError(f"Cannot read {path}: {exc}") from exc

    async def execute_command_line(
        self,
        executable: Path,
        arguments: str,
        working_directory: Path,
    ) -> ProcessResult:
        """Run executable with a Windows-style argument string and log its output."""
        try:
            argv = split_command_line(arguments)
        except ValueError as exc:
            raise ProcessExecutionError(
                f"Invalid command line for {executable}: {exc}"
            ) from exc
        log.debug("Executing %s %s (cwd=%s)", executable, arguments, working_directory)

        try:
            process = await asyncio.create_subprocess_exec(
                str(executable),
                *argv,
                cwd=working_directory,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessExecutionError(
                f"Failed to start {executable}: {exc}"
            ) from exc

        stdout, stderr = await process.communicate()

        for line in stdout.decode(errors="replace").splitlines():
            log.info("%s", line)
        for line in stderr.decode(errors="replace").splitlines():
            log.error("%s", line)

        exit_code = process.returncode
        if exit_code is None:  # pragma: no cover
            raise ProcessExecutionError(f"{executable} did not report an exit code")

        log.debug("%s exited with code %d", executable, exit_code)
        return ProcessResult(exit_code=exit_code)
