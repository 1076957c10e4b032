"""Configuration for the HTTP result sink."""

from pydantic import BaseModel, SecretStr


class HttpSinkConfig(BaseModel):
    """Configuration for the orchestrator's result-store API.

    ``api_base_url`` must end with a slash when it carries a path prefix,
    e.g. ``https://orchestrator.example.com/api/``.
    """

    api_base_url: str
    api_key: SecretStr
    execution_id: str
