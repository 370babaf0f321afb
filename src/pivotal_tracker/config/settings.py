"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from ..tracker.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """Application settings."""

    config_file: Path | None = Field(
        default=None,
        description="Config file read after ~/.pivotal_tracker.yml and ./.pivotal_tracker.yml",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Pivotal Tracker API base URL",
    )

    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "PIVOTAL_TRACKER_",
    }
