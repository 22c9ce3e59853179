"""YAML configuration loading.

The packaged ``mailfold.conf.yml`` holds every default. A user file is
deep-merged on top of it; the first match wins among:

1. the ``filename`` argument of :func:`load_config`,
2. the ``MAILFOLD_CONFIG`` environment variable,
3. ``./mailfold.conf.yml``,
4. ``~/.config/mailfold/mailfold.conf.yml``.

Only an explicit file (1 or 2) that does not exist is an error.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from box import Box

from mailfold.exceptions import ConfigFileNotFoundError, ConfigFormatError

log = logging.getLogger(__name__)

CONFIG_FILENAME = "mailfold.conf.yml"
CONFIG_ENV_VAR = "MAILFOLD_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).with_name(CONFIG_FILENAME)

_config: Box | None = None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigFormatError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFormatError(f"Config root must be a mapping in {path}, got {type(data).__name__}")
    return data


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def find_config_file(filename: str | os.PathLike[str] | None = None) -> Path | None:
    """Locate the user configuration file.

    Args:
        filename: Explicit path, checked first.

    Returns:
        The file to load, or None when only defaults apply.

    Raises:
        ConfigFileNotFoundError: If an explicit path does not exist.
    """
    explicit = filename or os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigFileNotFoundError(str(path))
        return path
    for candidate in (Path.cwd() / CONFIG_FILENAME, Path.home() / ".config" / "mailfold" / CONFIG_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def load_config(filename: str | os.PathLike[str] | None = None) -> Box:
    """Load defaults merged with the user configuration.

    Args:
        filename: Explicit configuration file.

    Returns:
        Configuration as a Box (attribute and key access).

    Raises:
        ConfigFileNotFoundError: If an explicit file does not exist.
        ConfigFormatError: If a file is not a YAML mapping.

    Examples:
        >>> config = load_config()  # doctest: +SKIP
        >>> config.mail.limits.max_attachments  # doctest: +SKIP
        20
    """
    data = _read_yaml(DEFAULT_CONFIG_PATH)
    path = find_config_file(filename)
    if path is not None:
        log.debug("Loading config from %s", path)
        data = _deep_merge(data, _read_yaml(path))
    return Box(data)


def get_config() -> Box:
    """Return the cached configuration, loading it on first use."""
    global _config  # pylint: disable=global-statement
    if _config is None:
        _config = load_config()
    return _config


def clear_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config  # pylint: disable=global-statement
    _config = None


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_PATH",
    "clear_config",
    "find_config_file",
    "get_config",
    "load_config",
]
