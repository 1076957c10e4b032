"""HTTP result sink manifest."""

from xunit_test_action.sinks.http.config import HttpSinkConfig
from xunit_test_action.sinks.http.sink import HttpResultSink
from xunit_test_action.sinks.manifest import SinkManifest

http_manifest = SinkManifest(
    config_cls=HttpSinkConfig,
    sink_factory=HttpResultSink.from_config,
)
