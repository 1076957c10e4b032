"""Fixtures for integration tests."""

from collections.abc import Generator
from pathlib import Path

import pytest
from aioresponses import aioresponses as aioresponses_cls

from xunit_test_action.testing.runners import WriteRunnerFn, write_fake_runner


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls, None, None]:
    """Intercept aiohttp requests."""
    with aioresponses_cls() as mocked:
        yield mocked


@pytest.fixture
def write_runner(tmp_path: Path) -> WriteRunnerFn:
    """Return a function creating a fake runner below tmp_path/runner."""

    def _write(report: bytes | None, *, exit_code: int = 0) -> Path:
        return write_fake_runner(tmp_path / "runner", report, exit_code=exit_code)

    return _write
