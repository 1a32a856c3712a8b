"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from mathns import MathConfig, create
from mathns.core import config_loader


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Keep user and environment configuration out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv(config_loader.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config_loader, "_CONFIG_CACHE", None)
    yield home


@pytest.fixture
def math():
    """A fresh namespace with default configuration."""
    return create(MathConfig())


@pytest.fixture
def import_events(math):
    """Record every ``import`` notification emitted by ``math``."""
    events = []
    math.on("import", lambda name, resolver, path: events.append((name, resolver, path)))
    return events


@pytest.fixture
def sample_extension():
    """Return the sample extension module."""
    from tests.plugins import sample_extension

    return sample_extension
