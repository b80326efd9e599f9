"""
Shared pytest fixtures for solcheck tests.

Every test gets a fresh service container and a logger that never writes
to ~/.solcheck.
"""

import gzip
import json
from pathlib import Path

import pytest

from solcheck.core.bootstrap import reset
from solcheck.services.toolchain import Component


@pytest.fixture(autouse=True)
def isolated_services(monkeypatch):
    """Reset global container state around each test."""
    monkeypatch.setenv("SOLCHECK_LOGGING__FILE", "false")
    reset()
    Component._install_lock = None
    yield
    reset()
    Component._install_lock = None


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    A contract project with a contracts/ directory.

    Returns:
        Path to the project root
    """
    (tmp_path / "contracts").mkdir()
    return tmp_path


@pytest.fixture
def binary_source(tmp_path: Path):
    """
    A local component index served over file:// URLs.

    Returns a function that publishes ``<name>.json`` and gzip archives, and
    yields the base URL.
    """
    source = tmp_path / "binaries"
    source.mkdir()

    def publish(name: str, versions: list[str], archives: dict[str, bytes]) -> str:
        (source / f"{name}.json").write_text(json.dumps({name: versions}))
        for archive_name, data in archives.items():
            (source / archive_name).write_bytes(gzip.compress(data))
        return source.as_uri()

    return publish
