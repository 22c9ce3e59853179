"""Logging for mailfold.

Modules log through the standard ``logging`` API under the ``mailfold``
namespace. :func:`init_logging` attaches a rich console handler to that
namespace and adds a ``.trace()`` method to every logger.

Examples:
    >>> from mailfold.logging import init_logging, get_logger
    >>> init_logging(preset="dev")  # doctest: +SKIP
    >>> get_logger("cli").trace("parsed arguments")  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mailfold.logging.manager import PRESETS, TRACE_LEVEL, LogManager

_NAMESPACE = "mailfold"
_root_logger: LogManager | None = None


def _trace(self: logging.Logger, msg: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, msg, args, **kwargs)


def init_logging(
    preset: str | None = None,
    config: Mapping[str, Any] | None = None,
) -> LogManager:
    """Configure the ``mailfold`` logger namespace.

    Args:
        preset: Logging preset (``dev``, ``debug``, ``prod``). When None,
            ``logging.preset`` from the loaded configuration is used.
        config: Handler overrides, see :class:`LogManager`.

    Returns:
        The root LogManager.
    """
    global _root_logger  # pylint: disable=global-statement

    if preset is None and config is None:
        from mailfold.config import get_config

        preset = get_config().get("logging", {}).get("preset")

    manager = LogManager(_NAMESPACE, preset=preset, config=config)

    std_logger = logging.getLogger(_NAMESPACE)
    for handler in list(std_logger.handlers):
        std_logger.removeHandler(handler)
    std_logger.setLevel(manager.level)
    for handler in manager.handlers:
        std_logger.addHandler(handler)

    if "trace" not in logging.Logger.__dict__:
        logging.Logger.trace = _trace  # type: ignore[attr-defined]

    _root_logger = manager
    return manager


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``mailfold`` namespace.

    Args:
        name: Module name. ``mailfold.`` is prepended when missing. None
            returns the root LogManager when initialized.

    Returns:
        The requested logger.
    """
    if name is None:
        return _root_logger if _root_logger is not None else logging.getLogger(_NAMESPACE)
    if name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)


__all__ = ["PRESETS", "TRACE_LEVEL", "LogManager", "get_logger", "init_logging"]
