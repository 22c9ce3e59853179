"""Shared pytest fixtures for the mailfold test suite."""

from __future__ import annotations

# Disable Rich colors and force wide terminal BEFORE any imports
# Rich checks these at import time
import os

os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"
os.environ["FORCE_COLOR"] = "0"
os.environ["COLUMNS"] = "200"  # Prevent text wrapping in CLI output

import io
import logging
import random
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

# Import private internals for testing purposes
import mailfold.config.loader as _cfg_loader
from mailfold.folding import Folder

# pylint: disable=redefined-outer-name


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against the packaged defaults only.

    The working directory and home are moved to a temp dir so no user
    ``mailfold.conf.yml`` is picked up, and the config cache is reset.
    """
    monkeypatch.delenv(_cfg_loader.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    _cfg_loader.clear_config()
    yield
    _cfg_loader.clear_config()


@pytest.fixture
def cfg_loader() -> Any:
    """Expose config.loader module for testing private helpers.

    Returns:
        Module object containing private config loader internals.
    """
    return _cfg_loader


@pytest.fixture
def reset_mailfold_logger() -> Iterator[logging.Logger]:
    """Restore the ``mailfold`` logger after a test reconfigures it."""
    logger = logging.getLogger("mailfold")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def folded() -> Any:
    """Fold tokens through a Folder writing to a StringIO."""

    def _fold(*tokens: Any, max_line_length: int = 78) -> str:
        out = io.StringIO()
        folder = Folder(out, max_line_length=max_line_length)
        folder.write(*tokens)
        folder.close()
        assert folder.error is None
        return out.getvalue()

    return _fold


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible boundaries."""
    return random.Random(1234)
