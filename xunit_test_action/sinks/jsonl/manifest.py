"""JSON-lines result sink manifest."""

from xunit_test_action.sinks.jsonl.config import JsonLinesSinkConfig
from xunit_test_action.sinks.jsonl.sink import JsonLinesResultSink
from xunit_test_action.sinks.manifest import SinkManifest

jsonl_manifest = SinkManifest(
    config_cls=JsonLinesSinkConfig,
    sink_factory=JsonLinesResultSink.from_config,
)
