"""JSON-lines result sink module."""

from xunit_test_action.sinks.jsonl.config import JsonLinesSinkConfig
from xunit_test_action.sinks.jsonl.manifest import jsonl_manifest
from xunit_test_action.sinks.jsonl.sink import JsonLinesResultSink

__all__ = ["JsonLinesResultSink", "JsonLinesSinkConfig", "jsonl_manifest"]
