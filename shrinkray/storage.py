"""Saving and restoring puzzle progress in a single key-value slot.

Stores hold raw JSON text under a key, the way a browser's localStorage does.
Only the current record shape is ever written; on read both the current and
the older single-stage shape are accepted, and anything else (wrong day,
different puzzle, tampered words, unparsable text) restores as a fresh start.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from shrinkray.catalog import PuzzleDefinition
from shrinkray.feedback import build_feedback
from shrinkray.session import MAX_RETRIES, Attempt, SessionState, empty_attempts
from shrinkray.words import STAGE_COUNT, TARGET_LENGTHS, normalize_word

logger = logging.getLogger(__name__)

STORAGE_KEY = "shrink-ray-state"


class MemoryStore:
    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStore:
    """One `<key>.json` file per key under `root`; I/O failures are logged, not raised."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8") if path.exists() else None
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write %s: %s", path, exc)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", path, exc)


# ----------------------------------------------------------------------------
# Stored record shapes
# ----------------------------------------------------------------------------


@dataclass
class StoredRecord:
    date: str
    start_word: str
    guesses: List[Any]
    attempts_by_stage: List[Any]
    total_attempts: Optional[int]
    locked_out: bool


@dataclass
class LegacyRecord:
    """Older shape: one flat attempt list for the stage at `active_step`."""

    date: str
    start_word: str
    guesses: List[Any]
    attempts: List[Any]
    active_step: int
    total_attempts: Optional[int]
    locked_out: bool


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_record(raw: Any) -> Union[StoredRecord, LegacyRecord, None]:
    if not isinstance(raw, dict) or not isinstance(raw.get("guesses"), list):
        return None

    date = raw.get("date")
    start_word = raw.get("startWord")
    total = _as_int(raw.get("totalAttempts"))
    # "failed" is what very old saves called the lockout flag
    locked = bool(raw.get("lockedOut")) or bool(raw.get("failed"))

    by_stage = raw.get("attemptsByStage", raw.get("attemptsByStep"))
    if isinstance(by_stage, list):
        return StoredRecord(date, start_word, raw["guesses"], by_stage, total, locked)

    step = _as_int(raw.get("activeStep"))
    if isinstance(raw.get("attempts"), list) and step is not None and 0 <= step < STAGE_COUNT:
        return LegacyRecord(date, start_word, raw["guesses"], raw["attempts"], step, total, locked)

    # neither attempt shape present: solved guesses and flags still count
    return StoredRecord(date, start_word, raw["guesses"], [], total, locked)


# ----------------------------------------------------------------------------
# Save / restore
# ----------------------------------------------------------------------------


def serialize_state(date: str, puzzle: PuzzleDefinition, state: SessionState) -> Dict[str, Any]:
    return {
        "date": date,
        "startWord": puzzle.start_word,
        "guesses": list(state.guesses),
        "attemptsByStage": [[attempt.guess for attempt in row] for row in state.attempts_by_stage],
        "totalAttempts": state.total_attempts,
        "lockedOut": state.locked_out,
    }


def save_state(store, date: str, puzzle: PuzzleDefinition, state: SessionState, key: str = STORAGE_KEY) -> None:
    store.set_item(key, json.dumps(serialize_state(date, puzzle, state)))
    logger.debug("Saved progress for %s", date)


def clear_state(store, key: str = STORAGE_KEY) -> None:
    store.remove_item(key)
    logger.debug("Cleared stored progress")


def _restore_guesses(stored: List[Any], puzzle: PuzzleDefinition) -> List[str]:
    guesses: List[str] = []
    for stage, length in enumerate(TARGET_LENGTHS):
        guess = normalize_word(stored[stage] if stage < len(stored) else None, length)
        # nothing after the first bad stage is trusted
        if not guess or guess != puzzle.target_words[stage]:
            break
        guesses.append(guess)
    return guesses


def _append_attempts(
    attempts_by_stage: List[List[Attempt]], stage: int, raw_attempts: List[Any], puzzle: PuzzleDefinition, total: int
) -> int:
    target = puzzle.target_words[stage]
    for raw_attempt in raw_attempts:
        if total >= MAX_RETRIES:
            break
        word = normalize_word(raw_attempt, TARGET_LENGTHS[stage])
        if not word or word == target:
            continue
        attempts_by_stage[stage].append(Attempt(guess=word, feedback=build_feedback(word, target)))
        total += 1
    return total


def _rebuild(record: Union[StoredRecord, LegacyRecord], puzzle: PuzzleDefinition) -> SessionState:
    guesses = _restore_guesses(record.guesses, puzzle)
    attempts_by_stage = empty_attempts()
    total = 0

    if isinstance(record, LegacyRecord):
        total = _append_attempts(attempts_by_stage, record.active_step, record.attempts, puzzle, total)
    else:
        for stage in range(STAGE_COUNT):
            if total >= MAX_RETRIES:
                break
            row = record.attempts_by_stage[stage] if stage < len(record.attempts_by_stage) else None
            if isinstance(row, list):
                total = _append_attempts(attempts_by_stage, stage, row, puzzle, total)

    # never let a shorter rebuilt list lower a count that was already recorded
    if record.total_attempts is not None:
        total = max(total, record.total_attempts)
    total = min(MAX_RETRIES, total)

    solved = len(guesses) >= STAGE_COUNT
    locked_out = False if solved else (record.locked_out or total >= MAX_RETRIES)

    return SessionState(guesses=guesses, attempts_by_stage=attempts_by_stage, total_attempts=total, locked_out=locked_out)


def restore_state(store, date: str, puzzle: PuzzleDefinition, key: str = STORAGE_KEY) -> SessionState:
    try:
        raw_text = store.get_item(key)
        if not raw_text:
            return SessionState()

        record = parse_record(json.loads(raw_text))
        if record is None:
            logger.warning("Stored progress has an unknown shape; starting fresh")
            return SessionState()

        if record.date != date or record.start_word != puzzle.start_word:
            logger.info("Stored progress is for another puzzle (%s); starting fresh", record.date)
            return SessionState()

        return _rebuild(record, puzzle)
    except (ValueError, TypeError, KeyError, AttributeError, IndexError, OSError) as exc:
        logger.warning("Could not restore stored progress: %s", exc)
        return SessionState()
