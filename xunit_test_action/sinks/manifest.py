"""Sink manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from xunit_test_action.sinks.base import ResultSink

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class SinkManifest(Generic[ConfigT]):
    """Manifest describing a result sink plugin.

    Holds the sink's configuration class and a factory opening the sink for
    the duration of one action run.
    """

    config_cls: type[ConfigT]
    sink_factory: Callable[[ConfigT], AbstractAsyncContextManager[ResultSink]]
