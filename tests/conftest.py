"""Shared pytest fixtures for host-backed navigation tests."""

import pytest

from tests.fakes import FakeHost


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in ("TABNAV_CONFIG_PATH", "TABNAV_VERBOSE", "TABNAV_BROWSER_VERSION"):
        monkeypatch.delenv(name, raising=False)
