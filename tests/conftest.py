"""Pytest configuration and fixtures."""

from __future__ import annotations

import os

import pytest

from livecon.core.config import ConsoleConfig
from livecon.core.context import ConsoleContext
from livecon.core.session import ConsoleSession


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep LIVECON_* variables from the outer shell out of tests."""
    for name in list(os.environ):
        if name.startswith("LIVECON_"):
            monkeypatch.delenv(name)


@pytest.fixture
def namespaces() -> list[str]:
    """Stand-in for the modules loaded in the interpreter."""
    return [
        "System",
        "System.Linq",
        "Systema",
        "collections",
        "collections.abc",
        "json",
    ]


@pytest.fixture
def config() -> ConsoleConfig:
    """Config without startup statements."""
    return ConsoleConfig(startup_statements=())


@pytest.fixture
def context(config: ConsoleConfig) -> ConsoleContext:
    return ConsoleContext(config=config)


@pytest.fixture
def session(config: ConsoleConfig, namespaces: list[str]):
    """Session with a fixed set of known namespaces."""
    session = ConsoleSession.create(config, namespace_provider=lambda: namespaces)
    yield session
    session.close()
