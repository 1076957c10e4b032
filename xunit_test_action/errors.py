"""Errors raised by the xUnit test action."""

from pathlib import Path


class XUnitActionError(Exception):
    """Base class for errors that abort an xUnit test action run."""


class ConfigurationError(XUnitActionError):
    """Raised when the action configuration is missing or invalid."""


class ExecutableNotFoundError(XUnitActionError):
    """Raised when the resolved xUnit runner executable does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"The xUnit runner could not be found: {path}")
        self.path = str(path)


class ProcessExecutionError(XUnitActionError):
    """Raised when the runner fails to start or terminates abnormally."""


class ReportParseError(XUnitActionError):
    """Raised when the runner's XML report is not well-formed."""


class ReportSchemaError(XUnitActionError):
    """Raised when the XML report lacks a required element or attribute."""


class SinkNotFoundError(XUnitActionError):
    """Raised when no result sink is registered under the requested key."""


class ResultSinkError(XUnitActionError):
    """Raised when the result store rejects an outcome record."""
