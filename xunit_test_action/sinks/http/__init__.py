"""HTTP result sink module."""

from xunit_test_action.sinks.http.config import HttpSinkConfig
from xunit_test_action.sinks.http.manifest import http_manifest
from xunit_test_action.sinks.http.sink import HttpResultSink

__all__ = ["HttpResultSink", "HttpSinkConfig", "http_manifest"]
