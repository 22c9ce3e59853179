"""Rich-backed logger with a TRACE level and configuration presets."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

#: Level below DEBUG for per-fold diagnostics.
TRACE_LEVEL = 5

logging.addLevelName(TRACE_LEVEL, "TRACE")

#: Named presets, merged under any explicit configuration.
PRESETS: dict[str, dict[str, Any]] = {
    "dev": {
        "console": {"level": "DEBUG", "show_path": True},
    },
    "debug": {
        "console": {"level": "TRACE", "show_path": True, "tracebacks_show_locals": True},
    },
    "prod": {
        "console": {"level": "WARNING", "show_path": False, "tracebacks_show_locals": False},
    },
}

DEFAULT_PRESET = "prod"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    name = level.upper()
    if name == "TRACE":
        return TRACE_LEVEL
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


class LogManager(logging.Logger):
    """Logger writing to a rich console handler.

    Args:
        name: Logger name.
        preset: One of :data:`PRESETS`. Defaults to ``prod``.
        config: Overrides merged over the preset, e.g.
            ``{"console": {"level": "DEBUG"}}``.

    Raises:
        ValueError: If the preset or a level name is unknown.

    Examples:
        >>> logger = LogManager(preset="dev")
        >>> logger.trace("fold decisions")  # doctest: +SKIP
    """

    def __init__(
        self,
        name: str = "mailfold",
        *,
        preset: str | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> None:
        preset_name = preset or DEFAULT_PRESET
        if preset_name not in PRESETS:
            raise ValueError(f"Unknown logging preset: {preset_name!r}")

        console_config = dict(PRESETS[preset_name]["console"])
        if config:
            console_config.update(config.get("console") or {})

        level = _resolve_level(console_config.get("level", "WARNING"))
        super().__init__(name, level)

        handler = RichHandler(
            console=Console(stderr=True),
            show_path=bool(console_config.get("show_path", False)),
            rich_tracebacks=True,
            tracebacks_show_locals=bool(console_config.get("tracebacks_show_locals", False)),
        )
        handler.setLevel(level)
        self.addHandler(handler)
        self.preset = preset_name

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, **kwargs)


__all__ = ["DEFAULT_PRESET", "PRESETS", "TRACE_LEVEL", "LogManager"]
