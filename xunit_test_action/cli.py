"""CLI entry point for the xUnit test action."""

import argparse
import asyncio
import json
import logging
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from xunit_test_action.action import XUnitTestAction
from xunit_test_action.agents.local import LocalAgent
from xunit_test_action.config_loader import load_configuration
from xunit_test_action.errors import ConfigurationError, XUnitActionError
from xunit_test_action.models.context import ExecutionContext
from xunit_test_action.models.result import OutcomeRecord
from xunit_test_action.paths import PLUGIN_INSTALL_DIR
from xunit_test_action.sinks.loading import load_sink_manifest

EXIT_FATAL = 2

STATUS_SYMBOLS = {
    True: "✅",
    False: "❌",
}


def log_results_summary(log: logging.Logger, outcomes: Sequence[OutcomeRecord]) -> None:
    """Log a formatted summary of recorded test outcomes."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for outcome in outcomes:
        log.info(
            "%s %s: %s (%.2fs)",
            STATUS_SYMBOLS[outcome.passed],
            outcome.test_name,
            "passed" if outcome.passed else "failed",
            outcome.duration,
        )


def format_output(outcomes: Sequence[OutcomeRecord]) -> dict[str, Any]:
    """Format recorded outcomes for JSON output."""
    results = [
        {
            "test": outcome.test_name,
            "passed": outcome.passed,
            "duration": outcome.duration,
            "start_time": outcome.start_time.isoformat(),
            "end_time": outcome.end_time.isoformat(),
        }
        for outcome in outcomes
    ]

    return {
        "total": len(results),
        "passed": sum(1 for r in results if r["passed"]),
        "failed": sum(1 for r in results if not r["passed"]),
        "results": results,
    }


def parse_sink_config(config_cls: type[Any], sink_config_json: str) -> Any:
    """Validate JSON sink configuration against the sink's config class."""
    try:
        return config_cls(**json.loads(sink_config_json))
    except (json.JSONDecodeError, TypeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid sink configuration: {exc}") from exc


async def run(
    config_path: Path,
    context: ExecutionContext,
    sink_key: str,
    sink_config_json: str,
    plugin_install_dir: Path = PLUGIN_INSTALL_DIR,
) -> int:
    """Run the xUnit test action and return exit code."""
    log = logging.getLogger("xunit_test_action")

    try:
        log.info("Loading configuration: %s", config_path)
        configuration = load_configuration(config_path)

        log.info("Loading result sink: %s", sink_key)
        manifest = load_sink_manifest(sink_key)
        sink_config = parse_sink_config(manifest.config_cls, sink_config_json)

        async with manifest.sink_factory(sink_config) as sink:
            action = XUnitTestAction(
                config=configuration.action,
                extension=configuration.extension,
                agent=LocalAgent(),
                sink=sink,
                plugin_install_dir=plugin_install_dir,
            )
            outcomes = await action.run(context)
    except XUnitActionError as exc:
        log.error("%s", exc)
        return EXIT_FATAL

    log_results_summary(log, outcomes)
    print(json.dumps(format_output(outcomes), indent=2))

    return 0 if all(outcome.passed for outcome in outcomes) else 1


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run xUnit tests and record their results"
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the YAML action configuration",
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        required=True,
        help="Source directory holding the build output (runner working directory)",
    )
    parser.add_argument(
        "--temp-dir",
        type=Path,
        default=Path(tempfile.gettempdir()),
        help="Directory for the generated XML report",
    )
    parser.add_argument(
        "--working-dir",
        type=Path,
        default=None,
        help="Directory relative runner paths resolve against (default: source dir)",
    )
    parser.add_argument(
        "--application-id",
        type=int,
        default=0,
        help="Application the tests belong to",
    )
    parser.add_argument(
        "--deployable-id",
        type=int,
        default=None,
        help="Deployable the tests belong to",
    )
    parser.add_argument(
        "--install-dir",
        type=Path,
        default=PLUGIN_INSTALL_DIR,
        help="Directory containing the bundled tools/ runners",
    )
    parser.add_argument(
        "--sink",
        required=True,
        help="Result sink key (jsonl, http)",
    )
    parser.add_argument(
        "--sink-config",
        required=True,
        help="JSON configuration for the result sink",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    source_dir = args.source_dir.resolve()
    context = ExecutionContext(
        application_id=args.application_id,
        deployable_id=args.deployable_id,
        working_directory=(args.working_dir or source_dir).resolve(),
        source_directory=source_dir,
        temp_directory=args.temp_dir.resolve(),
    )

    exit_code = asyncio.run(
        run(
            config_path=args.config,
            context=context,
            sink_key=args.sink,
            sink_config_json=args.sink_config,
            plugin_install_dir=args.install_dir,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
