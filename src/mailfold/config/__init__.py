"""Configuration for mailfold (YAML files exposed as Box objects)."""

from mailfold.config.loader import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_CONFIG_PATH,
    clear_config,
    find_config_file,
    get_config,
    load_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_PATH",
    "clear_config",
    "find_config_file",
    "get_config",
    "load_config",
]
