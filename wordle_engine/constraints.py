"""
constraints.py

Keeps track of Wordle-style constraints and filters candidate words.

A ConstraintState behaves as a value: apply_feedback() returns a new state and
leaves its input untouched, so hypothetical branches (undo, amended rounds)
are rebuilt from history instead of sharing one mutable object.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from wordle_engine.config import ALPHABET_SIZE, WORD_LENGTH
from wordle_engine.errors import ConstraintViolation
from wordle_engine.feedback import FeedbackItem, History, get_guess_feedback, matches_all_feedback


def _li(c: str) -> int:
    """Map a lowercase letter to 0..25."""
    return ord(c) - 97


def _letter_counts(word: str) -> List[int]:
    counts = [0] * ALPHABET_SIZE
    for ch in word:
        li = _li(ch)
        if 0 <= li < ALPHABET_SIZE:
            counts[li] += 1
    return counts


class ConstraintState:
    """
    Positional and count constraints accumulated over a game.

    position_known[i]  letter fixed at slot i (never changed once set)
    must_contain[li]   slots where letter li is known present but NOT sitting
    min_counts[li]     lower bound on occurrences of letter li
    max_counts[li]     upper bound, or None when unbounded
    """

    def __init__(self):
        self.word_length = WORD_LENGTH
        self.position_known: List[Optional[str]] = [None] * WORD_LENGTH
        self.must_contain: List[Set[int]] = [set() for _ in range(ALPHABET_SIZE)]
        self.min_counts: List[int] = [0] * ALPHABET_SIZE
        self.max_counts: List[Optional[int]] = [None] * ALPHABET_SIZE

    def copy(self) -> "ConstraintState":
        other = ConstraintState()
        other.position_known = list(self.position_known)
        other.must_contain = [set(s) for s in self.must_contain]
        other.min_counts = list(self.min_counts)
        other.max_counts = list(self.max_counts)
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintState):
            return NotImplemented
        return (
            self.position_known == other.position_known
            and self.must_contain == other.must_contain
            and self.min_counts == other.min_counts
            and self.max_counts == other.max_counts
        )

    def __repr__(self) -> str:
        known = "".join(c or "." for c in self.position_known)
        mins = {chr(97 + li): k for li, k in enumerate(self.min_counts) if k}
        maxs = {chr(97 + li): k for li, k in enumerate(self.max_counts) if k is not None}
        return f"ConstraintState(known={known!r}, min={mins}, max={maxs})"

    def check_invariants(self) -> None:
        """Raise ConstraintViolation if any max bound sits below its min bound."""
        for li in range(ALPHABET_SIZE):
            mx = self.max_counts[li]
            if mx is not None and mx < self.min_counts[li]:
                raise ConstraintViolation(
                    f"max count {mx} below min count {self.min_counts[li]} for {chr(97 + li)!r}"
                )


def create_constraint_state() -> ConstraintState:
    return ConstraintState()


def apply_feedback(state: ConstraintState, feedback: Sequence[FeedbackItem]) -> ConstraintState:
    """
    Fold one round of feedback into a copy of `state` and return it.

    - Green  = fix the letter at that slot
    - Yellow = letter must be included but not in that slot
    - Gray   = if the letter was green/yellow elsewhere this round, not in this
               slot; in every case the count is capped at green+yellow
    """
    new = state.copy()

    greens = [0] * ALPHABET_SIZE
    yellows = [0] * ALPHABET_SIZE
    grays = [0] * ALPHABET_SIZE
    seen: List[int] = []

    # Pass 1: tally per letter; greens and yellows set slot-level constraints
    for i, letter, result in feedback:
        li = _li(letter)
        if not 0 <= li < ALPHABET_SIZE:
            raise ValueError(f"feedback letter must be a-z, got {letter!r}")
        if not 0 <= i < new.word_length:
            raise ValueError(f"feedback index out of range: {i}")
        if li not in seen:
            seen.append(li)
        if result == "green":
            greens[li] += 1
            if new.position_known[i] is None:
                new.position_known[i] = letter
        elif result == "yellow":
            yellows[li] += 1
            new.must_contain[li].add(i)
        elif result == "gray":
            grays[li] += 1
        else:
            raise ValueError(f"feedback result must be green, yellow or gray, got {result!r}")

    # Pass 2: a gray copy of a letter seen green/yellow excludes that slot too
    for i, letter, result in feedback:
        li = _li(letter)
        if result == "gray" and greens[li] + yellows[li] > 0:
            new.must_contain[li].add(i)

    # Pass 3: count bounds
    for li in seen:
        k = greens[li] + yellows[li]
        if new.min_counts[li] < k:
            new.min_counts[li] = k
        if grays[li] > 0:
            prev = new.max_counts[li]
            new.max_counts[li] = k if prev is None else min(prev, k)
        mx = new.max_counts[li]
        if mx is not None and mx < new.min_counts[li]:
            # contradictory input; keep the state satisfiable
            new.max_counts[li] = None

    return new


def rebuild_constraints(history: History) -> ConstraintState:
    """Fold apply_feedback over a whole history, starting from an empty state."""
    state = create_constraint_state()
    for guess, result in history:
        state = apply_feedback(state, get_guess_feedback(guess, result))
    return state


def is_valid_candidate(word: str, constraints: ConstraintState) -> bool:
    w = word.strip().lower()
    counts = _letter_counts(w)

    for i, letter in enumerate(constraints.position_known):
        if letter is not None and (i >= len(w) or w[i] != letter):
            return False

    for li, bad_slots in enumerate(constraints.must_contain):
        if not bad_slots:
            continue
        if counts[li] == 0:
            return False
        letter = chr(97 + li)
        for i in bad_slots:
            if i < len(w) and w[i] == letter:
                return False

    for li in range(ALPHABET_SIZE):
        if counts[li] < constraints.min_counts[li]:
            return False
        mx = constraints.max_counts[li]
        if mx is not None and counts[li] > mx:
            return False

    return True


def filter_candidates(words: Iterable[str], constraints: ConstraintState, history: History) -> List[str]:
    """
    Keep (in order) the words that satisfy `constraints` AND reproduce every
    (guess, result) pair in `history`. The history check is redundant with a
    correct tracker; it is kept as a second, independent test.
    """
    history = list(history)
    return [
        w for w in words
        if is_valid_candidate(w, constraints) and matches_all_feedback(w, history)
    ]
