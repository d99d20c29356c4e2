"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from oparser.document import Document
from oparser.workspace import Workspace


@pytest.fixture
def temp_workspace():
    """Create a temporary workspace for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        workspace = Workspace(Path(tmpdir))
        workspace.initialize()
        yield workspace


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def router_config(fixtures_dir):
    """Return path to the sample PE router configuration (formal format)."""
    return fixtures_dir / "pe-router-01.cfg"


@pytest.fixture
def document(router_config):
    """Return the sample PE router configuration as a Document."""
    return Document.load(router_config)
