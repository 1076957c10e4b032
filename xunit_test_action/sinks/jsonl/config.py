"""Configuration for the JSON-lines result sink."""

from pathlib import Path

from pydantic import BaseModel


class JsonLinesSinkConfig(BaseModel):
    """Configuration for the JSON-lines result sink."""

    path: Path
