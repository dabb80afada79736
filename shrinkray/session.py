"""Puzzle progress: solved stages, wrong attempts and the shared retry budget."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from shrinkray.catalog import PuzzleDefinition
from shrinkray.feedback import build_feedback
from shrinkray.words import START_LENGTH, STAGE_COUNT, TARGET_LENGTHS, normalize_word

MAX_RETRIES = 3

LOCKED_MESSAGE = "Locked until tomorrow. Final score: {score}-letter word."
SOLVED_MESSAGE = "You solved today's Shrink Ray. Come back tomorrow for a new puzzle."


@dataclass
class Attempt:
    guess: str
    feedback: List[str]


def empty_attempts() -> List[List[Attempt]]:
    return [[] for _ in TARGET_LENGTHS]


@dataclass
class SessionState:
    guesses: List[str] = field(default_factory=list)
    attempts_by_stage: List[List[Attempt]] = field(default_factory=empty_attempts)
    total_attempts: int = 0
    locked_out: bool = False

    @property
    def current_stage(self) -> int:
        return len(self.guesses)

    @property
    def is_solved(self) -> bool:
        return len(self.guesses) >= STAGE_COUNT

    @property
    def final_score(self) -> int:
        return len(self.guesses[-1]) if self.guesses else START_LENGTH

    @property
    def attempts_left(self) -> int:
        return MAX_RETRIES - self.total_attempts

    def all_attempts(self) -> List[Attempt]:
        return [attempt for row in self.attempts_by_stage for attempt in row]


class Signal(str, Enum):
    NO_PUZZLE = "no_puzzle"
    ALREADY_SOLVED = "already_solved"
    LOCKED_OUT = "locked_out"
    WRONG_LENGTH = "wrong_length"
    INVALID_LETTERS = "invalid_letters"
    WRONG_GUESS = "wrong_guess"
    NEWLY_LOCKED_OUT = "newly_locked_out"
    ADVANCED = "advanced"
    SOLVED = "solved"


@dataclass(frozen=True)
class Outcome:
    signal: Signal
    message: str = ""
    remaining: int = 0
    final_score: int = START_LENGTH

    @property
    def changed_state(self) -> bool:
        return self.signal in (Signal.WRONG_GUESS, Signal.NEWLY_LOCKED_OUT, Signal.ADVANCED, Signal.SOLVED)


def submit_guess(
    state: SessionState, puzzle: Optional[PuzzleDefinition], guess: str, date: str = ""
) -> Outcome:
    """Apply one committed guess to `state` in place and report what happened."""
    if puzzle is None:
        return Outcome(Signal.NO_PUZZLE, f"No puzzle found for {date}.")

    if state.is_solved:
        return Outcome(
            Signal.ALREADY_SOLVED, "Puzzle already solved. Come back tomorrow.", final_score=state.final_score
        )

    if state.locked_out:
        return Outcome(
            Signal.LOCKED_OUT, LOCKED_MESSAGE.format(score=state.final_score), final_score=state.final_score
        )

    stage = state.current_stage
    expected = TARGET_LENGTHS[stage]
    guess = guess.strip().upper()
    if len(guess) != expected:
        return Outcome(Signal.WRONG_LENGTH, f"Enter a {expected}-letter word.", remaining=state.attempts_left)
    if not normalize_word(guess, expected):
        return Outcome(Signal.INVALID_LETTERS, "Only letters A–Z.", remaining=state.attempts_left)

    target = puzzle.target_words[stage]
    if guess == target:
        state.guesses.append(guess)
        if state.is_solved:
            # solving always wins over a stale lockout flag
            state.locked_out = False
            return Outcome(Signal.SOLVED, SOLVED_MESSAGE, remaining=state.attempts_left, final_score=state.final_score)
        return Outcome(Signal.ADVANCED, remaining=state.attempts_left, final_score=state.final_score)

    state.attempts_by_stage[stage].append(Attempt(guess=guess, feedback=build_feedback(guess, target)))
    state.total_attempts = min(MAX_RETRIES, state.total_attempts + 1)

    if state.total_attempts >= MAX_RETRIES:
        state.locked_out = True
        return Outcome(
            Signal.NEWLY_LOCKED_OUT, LOCKED_MESSAGE.format(score=state.final_score), final_score=state.final_score
        )

    return Outcome(
        Signal.WRONG_GUESS,
        f"Not quite. {state.attempts_left} attempts left.",
        remaining=state.attempts_left,
        final_score=state.final_score,
    )


def edit_buffer(buffer: str, key: str, max_length: int) -> str:
    """Apply a BACKSPACE or single-letter key to the guess being composed."""
    if key == "BACKSPACE":
        return buffer[:-1]
    letter = key.upper() if isinstance(key, str) else ""
    if len(letter) == 1 and "A" <= letter <= "Z" and len(buffer) < max_length:
        return buffer + letter
    return buffer


def letters_only(text: str, max_length: int) -> str:
    return "".join(ch for ch in (text or "").upper() if "A" <= ch <= "Z")[:max_length]
