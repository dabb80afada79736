"""Daily puzzle definitions, loaded once from the puzzle book."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from shrinkray.words import START_LENGTH, TARGET_LENGTHS, is_date_string, normalize_word

logger = logging.getLogger(__name__)

SOLUTION_FIELDS = ("six", "five", "four", "three")


@dataclass(frozen=True)
class PuzzleDefinition:
    date: str
    start_word: str
    target_words: Tuple[str, str, str, str]


def _legacy_word(words: Any, index: int) -> Any:
    if isinstance(words, list) and index < len(words):
        return words[index]
    return ""


def normalize_puzzle(entry: Any) -> Optional[PuzzleDefinition]:
    """Validate one raw puzzle entry, or return None if anything is off.

    Accepts `startWord` + `solution{six,five,four,three}`, falling back to a
    legacy `words` list (start word first, then the four targets).
    """
    if not isinstance(entry, dict):
        return None

    date = entry.get("date")
    if not is_date_string(date):
        return None

    words = entry.get("words")
    start_word = normalize_word(entry.get("startWord"), START_LENGTH) or normalize_word(
        _legacy_word(words, 0), START_LENGTH
    )

    targets = []
    solution = entry.get("solution")
    if isinstance(solution, dict):
        targets = [
            normalize_word(solution.get(field), length)
            for field, length in zip(SOLUTION_FIELDS, TARGET_LENGTHS)
        ]

    if (len(targets) != len(TARGET_LENGTHS) or not all(targets)) and isinstance(words, list):
        targets = [
            normalize_word(_legacy_word(words, index + 1), length)
            for index, length in enumerate(TARGET_LENGTHS)
        ]

    if not start_word or len(targets) != len(TARGET_LENGTHS) or not all(targets):
        return None

    return PuzzleDefinition(date=date, start_word=start_word, target_words=tuple(targets))


def load_catalog(raw_entries: Iterable[Any]) -> Dict[str, PuzzleDefinition]:
    catalog: Dict[str, PuzzleDefinition] = {}
    for entry in raw_entries:
        puzzle = normalize_puzzle(entry)
        if puzzle is None:
            logger.debug("Skipping malformed puzzle entry: %r", entry)
            continue
        # last one wins on a repeated date
        catalog[puzzle.date] = puzzle
    return catalog


def load_puzzle_book(path: Path) -> Dict[str, PuzzleDefinition]:
    """Read a `{"puzzles": [...]}` document; an unreadable book is an empty catalog."""
    try:
        book = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Could not read puzzle book %s: %s", path, exc)
        return {}

    raw_entries = book.get("puzzles") if isinstance(book, dict) else None
    if not isinstance(raw_entries, list):
        logger.warning("Puzzle book %s has no puzzle list", path)
        return {}

    catalog = load_catalog(raw_entries)
    logger.info("Loaded %s puzzles from %s", len(catalog), path)
    return catalog
