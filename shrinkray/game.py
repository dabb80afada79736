"""The active day's game: puzzle, progress, the guess being typed, and its store."""

import logging
from typing import Dict, Optional

from shrinkray.catalog import PuzzleDefinition
from shrinkray.session import (
    LOCKED_MESSAGE,
    SOLVED_MESSAGE,
    Outcome,
    SessionState,
    edit_buffer,
    letters_only,
    submit_guess,
)
from shrinkray.storage import STORAGE_KEY, clear_state, restore_state, save_state
from shrinkray.words import STAGE_COUNT, TARGET_LENGTHS

logger = logging.getLogger(__name__)


class Game:
    def __init__(self, catalog: Dict[str, PuzzleDefinition], store, date: str, storage_key: str = STORAGE_KEY):
        self.catalog = catalog
        self.store = store
        self.storage_key = storage_key
        self.date = date
        self.puzzle: Optional[PuzzleDefinition] = None
        self.state = SessionState()
        self.buffer = ""
        self._load()

    def _load(self) -> None:
        self.puzzle = self.catalog.get(self.date)
        if self.puzzle is None:
            self.state = SessionState()
        else:
            self.state = restore_state(self.store, self.date, self.puzzle, key=self.storage_key)
        self.buffer = ""
        self._persist()

    def _persist(self) -> None:
        if self.puzzle is None:
            clear_state(self.store, key=self.storage_key)
        else:
            save_state(self.store, self.date, self.puzzle, self.state, key=self.storage_key)

    def roll_over(self, date: str) -> None:
        clear_state(self.store, key=self.storage_key)
        self.date = date
        self._load()

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def current_stage(self) -> int:
        return self.state.current_stage

    @property
    def is_complete(self) -> bool:
        return self.puzzle is not None and self.state.is_solved

    @property
    def is_input_locked(self) -> bool:
        return self.puzzle is None or self.is_complete or self.state.locked_out

    @property
    def expected_length(self) -> int:
        if self.puzzle is None or self.is_complete:
            return 0
        return TARGET_LENGTHS[self.current_stage]

    @property
    def target_word(self) -> str:
        if self.puzzle is None or self.is_complete:
            return ""
        return self.puzzle.target_words[self.current_stage]

    @property
    def start_word(self) -> str:
        return self.puzzle.start_word if self.puzzle else ""

    @property
    def prior_word(self) -> str:
        if self.current_stage == 0:
            return self.start_word
        return self.state.guesses[self.current_stage - 1]

    @property
    def final_score_length(self) -> int:
        return self.state.final_score

    @property
    def instruction(self) -> str:
        if self.puzzle is None:
            return f"No puzzle exists for {self.date}."
        if self.is_complete:
            return SOLVED_MESSAGE
        if self.state.locked_out:
            return LOCKED_MESSAGE.format(score=self.final_score_length)
        return f"Build a {self.expected_length}-letter word from {self.prior_word}."

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def press(self, key: str) -> Optional[Outcome]:
        """ENTER commits, BACKSPACE deletes, letters extend the buffer."""
        if self.is_input_locked:
            return None
        if key == "ENTER":
            return self.commit()
        self.buffer = edit_buffer(self.buffer, key, self.expected_length)
        return None

    def type_text(self, text: str) -> None:
        if not self.is_input_locked:
            self.buffer = letters_only(text, self.expected_length)

    def clear_input(self) -> None:
        self.buffer = ""

    def commit(self) -> Outcome:
        outcome = submit_guess(self.state, self.puzzle, self.buffer, date=self.date)
        logger.debug("Guess %r on %s: %s", self.buffer, self.date, outcome.signal.value)
        if outcome.changed_state:
            self.buffer = ""
            self._persist()
        return outcome

    def stages(self):
        """(length, solved word or "", attempts) for each stage, for rendering."""
        for stage in range(STAGE_COUNT):
            solved = self.state.guesses[stage] if stage < len(self.state.guesses) else ""
            yield TARGET_LENGTHS[stage], solved, self.state.attempts_by_stage[stage]
