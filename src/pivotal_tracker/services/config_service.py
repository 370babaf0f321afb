"""Configuration loading for .pivotal_tracker.yml files."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..models.tracker_config import ConfigError, TrackerConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = ".pivotal_tracker.yml"


def default_config_paths(
    home: Path | None = None,
    cwd: Path | None = None,
    override: Path | None = None,
) -> list[Path]:
    """Candidate config files, lowest precedence first.

    Args:
        home: Home directory (default: Path.home())
        cwd: Working directory for a project-local config (default: Path.cwd())
        override: Explicit config file, e.g. from --config

    Returns:
        Paths to try, in merge order
    """
    home = home if home is not None else Path.home()
    cwd = cwd if cwd is not None else Path.cwd()

    paths = [home / CONFIG_FILE]
    local = cwd / CONFIG_FILE
    if local not in paths:
        paths.append(local)
    if override is not None:
        paths.append(override)
    return paths


def load_config(paths: Sequence[Path], required: Sequence[Path] = ()) -> TrackerConfig:
    """Load and merge configuration files.

    Every existing file is read in order; later files override earlier
    ones key by key, so Projects entries from several files are combined.

    Args:
        paths: Config files, lowest precedence first. Missing files are skipped.
        required: Files that must exist, e.g. one named with --config

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigError: If no file exists, a required file is missing, a file is
            not valid YAML, or the merged result fails validation
    """
    merged: dict[str, Any] = {}
    loaded: list[Path] = []

    for path in required:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

    for path in paths:
        if not path.is_file():
            logger.debug("No config at %s", path)
            continue

        data = _read_yaml(path)
        if data is None:
            logger.warning("%s is empty, skipping", path)
            continue

        merged = _deep_merge(merged, data)
        loaded.append(path)

    if not loaded:
        searched = ", ".join(str(p) for p in paths)
        raise ConfigError(f"No config file found (searched: {searched})")

    try:
        config = TrackerConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.info(
        "Loaded config from %s with %d projects",
        ", ".join(str(p) for p in loaded),
        len(config.projects),
    )
    return config


def _read_yaml(path: Path) -> dict[str, Any] | None:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading {path}: {e}") from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two mappings recursively without mutating either."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
