"""Models for the action and extension configuration."""

from typing import Any, Literal, TypeAlias

from pydantic import Field, field_validator

from xunit_test_action.models.base import Model

FrameworkVersion: TypeAlias = Literal["", "v2.0", "v4.0"]

FRAMEWORK_UNSPECIFIED: FrameworkVersion = ""
FRAMEWORK_NET20: FrameworkVersion = "v2.0"
FRAMEWORK_NET40: FrameworkVersion = "v4.0"


def is_blank(value: str | None) -> bool:
    """Return True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


class XUnitActionConfig(Model):
    """Persistent settings of a single xUnit test action."""

    exe_path: str = Field(
        default="",
        description="Runner executable override (blank uses the extension default)",
    )
    test_file: str = Field(
        ..., description="Assembly, project or xUnit file to run, relative to source"
    )
    framework_version: FrameworkVersion = Field(
        default=FRAMEWORK_UNSPECIFIED,
        description=".NET Framework version hosting the runner",
    )
    additional_arguments: str = Field(
        default="", description="Extra arguments passed verbatim to the runner"
    )
    custom_xml_output_path: str = Field(
        default="",
        description="Report path relative to source (blank uses a temp file)",
    )
    treat_inconclusive_as_failure: bool = Field(
        default=True, description="Record inconclusive tests as failures"
    )
    group_name: str = Field(default="", description="Display name of the test group")

    @field_validator(
        "exe_path",
        "additional_arguments",
        "custom_xml_output_path",
        "group_name",
        "framework_version",
        mode="before",
    )
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("test_file")
    @classmethod
    def _require_test_file(cls, value: str) -> str:
        if is_blank(value):
            raise ValueError("test_file is required")
        return value

    def __str__(self) -> str:
        description = f"Run xUnit Unit Tests on {self.test_file}"
        if not is_blank(self.additional_arguments):
            description += (
                f" with the additional arguments: {self.additional_arguments}"
            )
        return description


class XUnitExtensionConfig(Model):
    """Settings shared by every xUnit action on the orchestrator."""

    console_exe_path: str = Field(
        default="",
        description="Path to xunit.console.clr4.exe or xunit.console.exe",
    )

    @field_validator("console_exe_path", mode="before")
    @classmethod
    def _none_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class ConfigurationFile(Model):
    """Top-level layout of an action configuration file."""

    action: XUnitActionConfig
    extension: XUnitExtensionConfig = Field(default_factory=XUnitExtensionConfig)
