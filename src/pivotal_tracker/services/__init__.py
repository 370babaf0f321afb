"""Service layer."""

from .config_service import CONFIG_FILE, ConfigError, default_config_paths, load_config

__all__ = [
    "CONFIG_FILE",
    "ConfigError",
    "default_config_paths",
    "load_config",
]
