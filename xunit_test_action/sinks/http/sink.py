"""Result sink posting outcomes to the orchestrator's result-store API."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from urllib.parse import quote

import aiohttp

from xunit_test_action.errors import ResultSinkError
from xunit_test_action.models.result import OutcomeRecord
from xunit_test_action.sinks.base import ResultSink
from xunit_test_action.sinks.http.config import HttpSinkConfig
from xunit_test_action.sinks.http.models import UnitTestResultRequest

log = logging.getLogger(__name__)

ACCEPTED_STATUSES = frozenset({200, 201, 204})


@dataclass(frozen=True, kw_only=True)
class HttpResultSink(ResultSink):
    """Submits each outcome with one POST request."""

    config: HttpSinkConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: HttpSinkConfig
    ) -> AsyncGenerator["HttpResultSink", None]:
        """Create sink with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.api_key.get_secret_value()}",
            "Accept": "application/json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    @property
    def results_url(self) -> str:
        """Endpoint collecting unit test results of the execution."""
        return f"executions/{quote(self.config.execution_id, safe='')}/unit-tests"

    async def record(self, outcome: OutcomeRecord) -> None:
        """POST the outcome to the result store."""
        payload = UnitTestResultRequest.from_outcome(outcome).model_dump(mode="json")

        try:
            async with self.session.post(self.results_url, json=payload) as response:
                if response.status not in ACCEPTED_STATUSES:
                    text = await response.text()
                    raise ResultSinkError(
                        f"Failed to record {outcome.test_name}: "
                        f"{response.status} {text}"
                    )
        except aiohttp.ClientError as exc:
            raise ResultSinkError(
                f"Failed to record {outcome.test_name}: {exc}"
            ) from exc

        log.debug("Recorded %s (passed=%s)", outcome.test_name, outcome.passed)
