"""Shared fixtures for snapshot parser tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def native_json():
    return (FIXTURES_DIR / "friday.groupvote.json").read_bytes()


@pytest.fixture
def collection_json():
    return (FIXTURES_DIR / "date-night.collection.json").read_bytes()
