from typing import Dict, Iterable, List

CORRECT = "correct"
PRESENT = "present"
ABSENT = "absent"

PRIORITY = {CORRECT: 3, PRESENT: 2, ABSENT: 1, "unused": 0}


def build_feedback(guess: str, target: str) -> List[str]:
    """Per-letter correct/present/absent for `guess` against `target`.

    Duplicate letters are only credited as many times as they occur in the
    target: greens are taken first, then yellows from what is left over.
    """
    if len(guess) != len(target):
        raise ValueError(f"guess {guess!r} and target {target!r} differ in length")

    states = [ABSENT] * len(target)
    remaining: Dict[str, int] = {}

    # Greens
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            states[i] = CORRECT
        else:
            remaining[t] = remaining.get(t, 0) + 1

    # Yellows
    for i, g in enumerate(guess):
        if states[i] == CORRECT:
            continue
        if remaining.get(g, 0) > 0:
            states[i] = PRESENT
            remaining[g] -= 1

    return states


def letter_statuses(attempts: Iterable) -> Dict[str, str]:
    """Best state seen per letter across attempts, for colouring the keyboard."""
    best: Dict[str, str] = {}
    for attempt in attempts:
        for ch, stt in zip(attempt.guess, attempt.feedback):
            if PRIORITY[stt] > PRIORITY[best.get(ch, "unused")]:
                best[ch] = stt
    return best
