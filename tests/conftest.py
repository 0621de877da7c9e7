"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_records():
    """Array of records, each with an id key."""
    return [
        {"id": 1, "name": "Alice"},
        {"id": 2, "name": "Bob"},
    ]


@pytest.fixture
def sample_keyed_records():
    """Records keyed by id, the id key removed."""
    return {
        "1": {"name": "Alice"},
        "2": {"name": "Bob"},
    }


@pytest.fixture
def sample_document():
    """Nested document for pointer and statement tests."""
    return {
        "definitions": {
            "user": {"type": "object"},
            "group": {"type": "array"},
        },
        "items": [10, 20, 30],
        "meta": {"version": 2, "active": True, "owner": None},
        "a~b": "tilde",
        "c/d": "slash",
    }
