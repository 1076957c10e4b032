"""Loading of result sinks from entry points."""

from importlib.metadata import entry_points
from typing import Any

from xunit_test_action.errors import SinkNotFoundError
from xunit_test_action.sinks.manifest import SinkManifest

ENTRY_POINT_GROUP = "xunit_test_action.sinks"


def load_sink_manifest(key: str) -> SinkManifest[Any]:
    """Load a sink manifest by key.

    Args:
        key: The sink key as registered in pyproject.toml (e.g., "jsonl")

    Raises:
        SinkNotFoundError: If no sink with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: SinkManifest[Any] = entry.load()
            return manifest

    available = sorted(e.name for e in entries)
    raise SinkNotFoundError(f"Sink '{key}' not found. Available sinks: {available}")
