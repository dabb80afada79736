import re
from typing import Any

START_LENGTH = 7
TARGET_LENGTHS = [6, 5, 4, 3]
STAGE_COUNT = len(TARGET_LENGTHS)

_WORD_RE = re.compile(r"[A-Z]+")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def normalize_word(value: Any, expected_length: int = 0) -> str:
    """Trim and upper-case `value`; return "" unless it is A-Z only (and the right length)."""
    if not isinstance(value, str):
        return ""

    normalized = value.strip().upper()
    if not _WORD_RE.fullmatch(normalized):
        return ""

    if expected_length and len(normalized) != expected_length:
        return ""

    return normalized


def is_date_string(value: Any) -> bool:
    return isinstance(value, str) and bool(_DATE_RE.fullmatch(value))


def stage_length(stage: int) -> int:
    return TARGET_LENGTHS[stage]
