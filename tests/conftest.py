"""
Pytest configuration and shared fixtures for regression_test tests.
"""

import json
import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def baseline_path(temp_dir):
    """Path of a baseline file that does not exist yet."""
    return temp_dir / "t.json"


@pytest.fixture
def write_json():
    """Write raw JSON content to a file, bypassing the storage layer."""

    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
