"""
Pytest configuration and shared fixtures for caskconf tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from caskconf.config import LazyValue, SystemContext
from caskconf.config.environment import reset_current
from caskconf.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path: Path):
    """
    Keep tests independent of the developer's environment.

    HOME points at an empty temporary directory, caskconf variables are
    unset, and the process-wide context and logger are reset afterwards.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("CASKCONF_CASK_OPTS", "CASKCONF_PREFIX", "XDG_DATA_HOME"):
        monkeypatch.delenv(var, raising=False)
    reset_current()
    yield
    reset_current()
    set_global_logger(SilentLogger())


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Provide the temporary HOME directory."""
    return tmp_path / "home"


@pytest.fixture
def cask_opts() -> list[str]:
    """
    Provide the mutable option list returned by the test context.

    Tests append "--flag=value" strings before the env layer is first read.
    """
    return []


@pytest.fixture
def language_calls() -> list[int]:
    """Record each call to the fake OS language provider."""
    return []


@pytest.fixture
def system(cask_opts: list[str], language_calls: list[int]) -> SystemContext:
    """
    Provide a deterministic SystemContext.

    The OS reports ["en"], the prefix is /opt/test and the platform is
    macOS, regardless of where the tests run.
    """

    def _languages() -> list[str]:
        language_calls.append(1)
        return ["en"]

    return SystemContext(
        cask_opts=lambda: list(cask_opts),
        languages=LazyValue(_languages),
        prefix=Path("/opt/test"),
        platform="darwin",
    )


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("defaults.yaml", {"appdir": "/Apps"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
