"""Shared fixtures for the Shrink Ray test suite."""

import json

import pytest

from shrinkray.catalog import PuzzleDefinition
from shrinkray.storage import STORAGE_KEY, MemoryStore

DATE = "2026-10-14"


@pytest.fixture
def puzzle():
    return PuzzleDefinition(
        date=DATE, start_word="PLANETS", target_words=("PLANET", "PLANE", "PLAN", "PAN")
    )


@pytest.fixture
def other_puzzle():
    return PuzzleDefinition(
        date="2026-10-15", start_word="STAPLES", target_words=("STAPLE", "STALE", "TALE", "ALE")
    )


@pytest.fixture
def catalog(puzzle, other_puzzle):
    return {puzzle.date: puzzle, other_puzzle.date: other_puzzle}


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def stored(store):
    """Write a raw record into the store under the game's key."""

    def _write(record):
        store.set_item(STORAGE_KEY, json.dumps(record))
        return store

    return _write


@pytest.fixture
def raw_entry():
    return {
        "date": DATE,
        "startWord": "planets",
        "solution": {"six": "planet", "five": "plane", "four": "plan", "three": "pan"},
    }
