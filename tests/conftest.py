"""Pytest configuration and fixtures for ecadmin tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ecadmin.config import AdminConfig
from ecadmin.logging_utils import setup_logging
from ecadmin.models import NamespaceState
from ecadmin.namespace import InMemoryNamespace
from test_helpers import RecordingConnector


@pytest.fixture(autouse=True)
def silent_logging():
    """Keep ecadmin events out of test output."""
    setup_logging(None)
    yield
    setup_logging(None)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ECADMIN_CONF", raising=False)


@pytest.fixture
def namespace() -> InMemoryNamespace:
    """Namespace with the system policies and one regular file."""
    return InMemoryNamespace(NamespaceState(files=["/data/report.csv"]))


@pytest.fixture
def connector(namespace: InMemoryNamespace) -> RecordingConnector:
    return RecordingConnector(namespace)


@pytest.fixture
def config(tmp_path: Path) -> AdminConfig:
    return AdminConfig(state_file=tmp_path / "namespace.json")
