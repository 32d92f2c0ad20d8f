"""
Global fixtures live here

Sample documents and PathStores shared by the test modules.
"""
from pathlib import Path

import pytest

from pathstore.core.store import PathStore

DATA_DIR = Path(__file__).parent / "data"

@pytest.fixture
def sample_json() -> bytes:
    """Raw bytes of the sample event document."""
    return (DATA_DIR / "test_data.json").read_bytes()

@pytest.fixture
def sample_store(sample_json: bytes) -> PathStore:
    """A PathStore over the sample event document."""
    return PathStore.from_json(sample_json)

@pytest.fixture
def clean_env(monkeypatch):
    """Make sure no delimiter override leaks in from the environment."""
    monkeypatch.delenv("PATHSTORE_DELIMITER", raising=False)
