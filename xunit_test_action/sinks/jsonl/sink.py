"""Result sink appending outcomes to a JSON-lines file."""

import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TextIO

from xunit_test_action.errors import ResultSinkError
from xunit_test_action.models.result import OutcomeRecord
from xunit_test_action.sinks.base import ResultSink
from xunit_test_action.sinks.jsonl.config import JsonLinesSinkConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class JsonLinesResultSink(ResultSink):
    """Appends one JSON object per outcome to a file."""

    config: JsonLinesSinkConfig
    stream: TextIO = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: JsonLinesSinkConfig
    ) -> AsyncGenerator["JsonLinesResultSink", None]:
        """Open the result file for appending for the lifetime of the sink."""
        try:
            config.path.parent.mkdir(parents=True, exist_ok=True)
            stream = config.path.open("a", encoding="utf-8")
        except OSError as exc:
            raise ResultSinkError(
                f"Cannot open result file {config.path}: {exc}"
            ) from exc

        log.debug("Recording results to %s", config.path)
        with stream:
            yield cls(config=config, stream=stream)

    async def record(self, outcome: OutcomeRecord) -> None:
        """Append the outcome as a single line."""
        try:
            self.stream.write(json.dumps(outcome.to_payload()) + "\n")
            self.stream.flush()
        except OSError as exc:
            raise ResultSinkError(
                f"Failed to record {outcome.test_name} to {self.config.path}: {exc}"
            ) from exc
