"""Tests for shrinkray.feedback."""

from collections import Counter

import pytest

from shrinkray.feedback import ABSENT, CORRECT, PRESENT, build_feedback, letter_statuses
from shrinkray.session import Attempt


class TestBuildFeedback:
    def test_exact_match_all_correct(self):
        assert build_feedback("PLANET", "PLANET") == [CORRECT] * 6

    def test_single_wrong_letter(self):
        assert build_feedback("PLANED", "PLANET") == [CORRECT] * 5 + [ABSENT]

    def test_present_letters(self):
        assert build_feedback("NAP", "PAN") == [PRESENT, CORRECT, PRESENT]

    def test_duplicate_guess_letter_credited_once(self):
        # two E in the target: one green, one left over for the first E
        assert build_feedback("EERIE", "THREE") == [PRESENT, ABSENT, CORRECT, ABSENT, CORRECT]

    def test_duplicate_target_letter(self):
        assert build_feedback("ALLEY", "LLAMA") == [PRESENT, CORRECT, PRESENT, ABSENT, ABSENT]

    @pytest.mark.parametrize(
        "guess,target",
        [("EERIE", "THREE"), ("ALLEY", "LLAMA"), ("SASSY", "BASIS"), ("PPPP", "PLAN"), ("AAA", "ALA")],
    )
    def test_never_over_credits_a_letter(self, guess, target):
        states = build_feedback(guess, target)
        credited = Counter(g for g, s in zip(guess, states) if s in (CORRECT, PRESENT))
        for letter, count in credited.items():
            assert count <= target.count(letter)
        for i, (g, t) in enumerate(zip(guess, target)):
            assert (states[i] == CORRECT) == (g == t)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            build_feedback("PLANE", "PLANET")


class TestLetterStatuses:
    def test_best_state_wins(self):
        attempts = [
            Attempt("NAP", build_feedback("NAP", "PAN")),
            Attempt("PIT", build_feedback("PIT", "PAN")),
        ]
        statuses = letter_statuses(attempts)
        assert statuses["P"] == CORRECT
        assert statuses["N"] == PRESENT
        assert statuses["T"] == ABSENT

    def test_empty(self):
        assert letter_statuses([]) == {}
