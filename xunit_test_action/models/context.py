"""Execution context of a single action invocation."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class ExecutionContext:
    """Where the action runs, scoped to one application and deployable.

    ``working_directory`` anchors relative runner paths; ``source_directory``
    holds the build output and is the runner's working directory.
    """

    application_id: int
    deployable_id: int | None = None
    working_directory: Path
    source_directory: Path
    temp_directory: Path
