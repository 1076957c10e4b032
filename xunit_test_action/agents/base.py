"""Abstract base class for agents that host the test runner."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from xunit_test_action.models.context import ExecutionContext


@dataclass(frozen=True, kw_only=True)
class ProcessResult:
    """Outcome of an external process that ran to completion."""

    exit_code: int

    @property
    def terminated_abnormally(self) -> bool:
        """True when the process was killed by a signal."""
        return self.exit_code < 0


@dataclass(frozen=True, kw_only=True)
class Agent(ABC):
    """File system and process services of the machine running the tests.

    The action reaches the file system and spawns processes only through
    the agent.
    """

    @abstractmethod
    def get_working_directory(self, context: ExecutionContext, path: str) -> Path:
        """Resolve a path against the application's working directory.

        Args:
            context: Invocation the path belongs to
            path: Absolute path, or path relative to the working directory

        Returns:
            Absolute path

        """

    def combine_path(self, *parts: str | Path) -> Path:
        """Join path segments using the agent's path conventions."""
        return Path(*parts)

    @abstractmethod
    async def file_exists(self, path: Path) -> bool:
        """Check whether a regular file exists at path."""

    @abstractmethod
    async def read_file_bytes(self, path: Path) -> bytes:
        """Return the full content of a file."""

    @abstractmethod
    async def execute_command_line(
        self,
        executable: Path,
        arguments: str,
        working_directory: Path,
    ) -> ProcessResult:
        """Run an executable and wait for it to exit.

        Args:
            executable: Program to launch
            arguments: Command-line argument string, quoted as on a shell
            working_directory: Directory the process starts in

        Returns:
            Exit information of the finished process

        Raises:
            ProcessExecutionError: If the process cannot be started

        """
