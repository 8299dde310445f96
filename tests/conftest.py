"""Shared pytest fixtures for remotepipe tests."""

from __future__ import annotations

import sys

import pytest

from remotepipe.core.engine import DispatchEngine
from remotepipe.core.models.config import RemoteConfig


@pytest.fixture(scope="session")
def remote_config() -> RemoteConfig:
    """Session-scoped default config (no file I/O)."""
    return RemoteConfig()


@pytest.fixture
def make_engine():
    """Build engines that are stopped and joined after the test."""
    if sys.platform == "win32":
        pytest.skip("fake helpers rely on POSIX shebang scripts")

    engines: list[DispatchEngine] = []

    def _make(helper_path, **kwargs) -> DispatchEngine:
        kwargs.setdefault("terminate_timeout", 1.0)
        engine = DispatchEngine(helper_path, **kwargs)
        engines.append(engine)
        return engine

    yield _make

    for engine in engines:
        engine.stop()
        engine.join(timeout=5.0)
