"""Load and dump action configuration files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from xunit_test_action.errors import ConfigurationError
from xunit_test_action.models.configuration import ConfigurationFile


def load_configuration(path: Path) -> ConfigurationFile:
    """Load an action configuration from a YAML file.

    Raises:
        ConfigurationError: If the file is missing, not valid YAML, empty,
            or does not match the configuration schema

    """
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(
            f"Cannot read configuration file {path}: {exc}"
        ) from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        raise ConfigurationError(f"Empty configuration file: {path}")

    return parse_configuration(data, source=str(path))


def parse_configuration(data: object, source: str = "<config>") -> ConfigurationFile:
    """Validate already-decoded configuration data."""
    try:
        return ConfigurationFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid action configuration in {source}: {exc}"
        ) from exc


def dump_configuration(config: ConfigurationFile) -> str:
    """Serialize a configuration to YAML accepted by load_configuration."""
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)
