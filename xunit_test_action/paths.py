"""Resolve the runner executable and XML report locations."""

import uuid
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from xunit_test_action.models.configuration import (
    FRAMEWORK_NET20,
    FrameworkVersion,
    is_blank,
)

NET20_RUNNER = "xunit.console.exe"
NET40_RUNNER = "xunit.console.clr4.exe"
BUNDLED_TOOLS_DIR = Path("tools", "xunit.runners", "tools")

PLUGIN_INSTALL_DIR = Path(__file__).resolve().parent

ResolveWorkingPath: TypeAlias = Callable[[str], Path]
CombinePath: TypeAlias = Callable[..., Path]


def bundled_runner_name(framework_version: FrameworkVersion) -> str:
    """Pick the bundled console runner for a framework version."""
    if framework_version == FRAMEWORK_NET20:
        return NET20_RUNNER
    return NET40_RUNNER


def resolve_executable_path(
    explicit_override: str | None,
    configured_default_path: str | None,
    framework_version: FrameworkVersion,
    plugin_install_dir: Path,
    working_directory: ResolveWorkingPath,
) -> Path:
    """Determine the runner executable to launch.

    Args:
        explicit_override: Per-action executable path
        configured_default_path: Extension-wide executable path
        framework_version: Selects the bundled runner when nothing is configured
        plugin_install_dir: Directory the bundled tools live under
        working_directory: Maps a path to an absolute one for the current
            application and deployable

    Returns:
        Absolute executable path

    """
    if explicit_override and not is_blank(explicit_override):
        return working_directory(explicit_override)

    if configured_default_path and not is_blank(configured_default_path):
        return working_directory(configured_default_path)

    bundled = plugin_install_dir / BUNDLED_TOOLS_DIR / bundled_runner_name(
        framework_version
    )
    return working_directory(str(bundled))


def resolve_output_path(
    custom_path: str | None,
    source_dir: Path,
    temp_dir: Path,
    combine_path: CombinePath = Path,
) -> Path:
    """Determine where the runner writes its XML report.

    A blank custom path yields a fresh ``<uuid4>.xml`` in the temp directory,
    so concurrent invocations never share a report file.
    """
    if not custom_path or is_blank(custom_path):
        return combine_path(temp_dir, f"{uuid.uuid4()}.xml")

    return combine_path(source_dir, custom_path)
