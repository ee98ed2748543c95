"""Pytest configuration and shared fixtures for the hexdiff test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Callable

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings
from utils import build_hex

# Register custom Hypothesis profiles; the autouse fixtures below are function scoped
_SUPPRESSED = [HealthCheck.function_scoped_fixture]
settings.register_profile("ci", max_examples=300, verbosity=Verbosity.verbose, suppress_health_check=_SUPPRESSED)
settings.register_profile("dev", max_examples=100, suppress_health_check=_SUPPRESSED)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
    suppress_health_check=_SUPPRESSED,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user and repository configuration files out of every test.

    The working directory and home directory both point at an empty
    temporary directory and ``HEXDIFF_CONFIG`` is unset.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("HEXDIFF_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def hex_file(tmp_path) -> Callable[..., Path]:
    """Write Intel HEX files built from ``{address: value}`` word mappings.

    Returns
    -------
    callable
        ``hex_file(name, words, **build_hex_kwargs) -> Path``

    """

    def _write(name: str, words: dict, **kwargs) -> Path:
        path = tmp_path / name
        path.write_text(build_hex(words, **kwargs), encoding="ascii")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler changes made by CLI runs so caplog keeps working."""
    yield
    logger = logging.getLogger("hexdiff")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
