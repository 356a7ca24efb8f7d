"""
session.py

One solving session: the round loop built from the engine primitives.

    ROUND_START -> (guess proposed) -> AWAITING_FEEDBACK
        -> (feedback validated & applied) -> FILTERED
        -> SOLVED | EXHAUSTED | FAILED | back to ROUND_START

SOLVED:    the feedback was all green, or exactly one candidate is left
EXHAUSTED: no candidate is consistent with the feedback (an input error
           earlier on; undo() or amend() and carry on)
FAILED:    the round budget ran out with several candidates left

Constraints are rebuilt from history whenever a past round changes, so a
session never shares mutable state with another one; use branch() to explore
a hypothetical line of play.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

from wordle_engine.config import MAX_ROUNDS, OPENING_GUESS, REPORT_SAMPLE_SIZE, WORD_LENGTH
from wordle_engine.constraints import (
    ConstraintState,
    apply_feedback,
    create_constraint_state,
    filter_candidates,
)
from wordle_engine.errors import InvalidFeedbackFormat, NoSelectableGuess, SessionOver
from wordle_engine.feedback import get_guess_feedback, is_solved_result, is_valid_result, score_guess
from wordle_engine.guesser import PartitionScore, pick_best_guess, rank_guesses
from wordle_engine.vocab import WordVocab

log = logging.getLogger(__name__)


class Phase(Enum):
    ROUND_START = "round_start"
    AWAITING_FEEDBACK = "awaiting_feedback"
    FILTERED = "filtered"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class Outcome(Enum):
    CONTINUE = "continue"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"  # empty candidate set
    FAILED = "failed"        # rounds exhausted


_TERMINAL = {
    Outcome.SOLVED: Phase.SOLVED,
    Outcome.EXHAUSTED: Phase.EXHAUSTED,
    Outcome.FAILED: Phase.FAILED,
}


class HistoryEntry(NamedTuple):
    guess: str
    result: str


@dataclass
class RoundReport:
    round: int
    guess: str
    result: str
    outcome: Outcome
    remaining: int
    sample: List[str] = field(default_factory=list)
    guesses_left: int = 0
    next_guess: Optional[str] = None
    next_score: Optional[PartitionScore] = None
    ranking: List[Dict[str, object]] = field(default_factory=list)
    answer: Optional[str] = None

    @property
    def guaranteed(self) -> bool:
        """Every remaining candidate can still be tried within the budget."""
        return self.outcome is Outcome.CONTINUE and 0 < self.remaining <= self.guesses_left

    @property
    def at_risk(self) -> bool:
        """More candidates than guesses left; the game might not be solved in time."""
        return self.outcome is Outcome.CONTINUE and self.remaining > self.guesses_left


class SolverSession:
    def __init__(
        self,
        words: Union[WordVocab, Sequence[str]],
        *,
        max_rounds: int = MAX_ROUNDS,
        opening: Optional[str] = OPENING_GUESS,
        replay: Optional[Sequence[str]] = None,
        sample_size: int = REPORT_SAMPLE_SIZE,
    ) -> None:
        if isinstance(words, WordVocab):
            words = words.words()
        if int(max_rounds) < 1:
            raise ValueError("max_rounds must be at least 1")

        self.word_length = WORD_LENGTH
        self.max_rounds = int(max_rounds)
        self.sample_size = int(sample_size)
        self._words: List[str] = list(words)
        self._opening = self._check_word(opening) if opening else None
        self._replay: List[str] = [self._check_word(w) for w in (replay or [])]

        self._constraints: ConstraintState = create_constraint_state()
        self._candidates: List[str] = list(self._words)
        self._history: List[HistoryEntry] = []
        self._override: Optional[str] = None
        self._proposal: Optional[str] = None
        self._recommended: Optional[str] = None
        self._last_report: Optional[RoundReport] = None
        self._phase = Phase.ROUND_START

    # -------------------------
    # Introspection
    # -------------------------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def finished(self) -> bool:
        return self._phase in (Phase.SOLVED, Phase.EXHAUSTED, Phase.FAILED)

    @property
    def round(self) -> int:
        """Number of completed rounds."""
        return len(self._history)

    @property
    def candidates(self) -> List[str]:
        return list(self._candidates)

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def constraints(self) -> ConstraintState:
        return self._constraints.copy()

    @property
    def last_report(self) -> Optional[RoundReport]:
        return self._last_report

    # -------------------------
    # Round API
    # -------------------------
    def propose(self) -> str:
        """
        Guess for the current round: a forced replay guess, else the manual
        override, else the opening guess on the first round, else the selector.
        """
        if self.finished:
            raise SessionOver(f"session already {self._phase.value}")
        if self._proposal is None:
            r = len(self._history)
            if r < len(self._replay):
                guess = self._replay[r]
            elif self._override is not None:
                guess = self._override
            elif r == 0 and self._opening is not None:
                guess = self._opening
            else:
                guess = self._recommended or pick_best_guess(self._candidates)
                if guess is None:
                    raise NoSelectableGuess("no candidates left to guess from")
            self._proposal = guess
            self._set_phase(Phase.AWAITING_FEEDBACK)
        return self._proposal

    def override(self, word: str) -> str:
        """Use `word` instead of the recommendation for the current round."""
        if self.finished:
            raise SessionOver(f"session already {self._phase.value}")
        self._override = self._check_word(word)
        self._proposal = None
        return self._override

    def submit(self, result: str, guess: Optional[str] = None) -> RoundReport:
        """
        Record the feedback `result` for `guess` (default: the current
        proposal), update constraints and candidates, and report the outcome.

        Raises InvalidFeedbackFormat for a malformed result; the session is
        left unchanged so the caller can ask again.
        """
        if self.finished:
            raise SessionOver(f"session already {self._phase.value}")
        if not is_valid_result(result):
            raise InvalidFeedbackFormat("result must contain only x, g, or y (e.g. xgygx)")
        r = result.strip().lower()
        if len(r) != self.word_length:
            raise InvalidFeedbackFormat(f"result must have {self.word_length} codes, got {len(r)}")
        guess = self.propose() if guess is None else self._check_word(guess)
        return self._advance(HistoryEntry(guess, r), recommend=True)

    def undo(self) -> HistoryEntry:
        """
        Drop the last round (e.g. to recolor mistyped feedback) and recompute
        everything from the corpus. The dropped guess becomes the current
        round's guess again.
        """
        if not self._history:
            raise ValueError("no rounds to undo")
        last = self._history[-1]
        self._replay_history(self._history[:-1])
        self._override = last.guess
        log.debug("Undid round %d (%s %s)", len(self._history) + 1, last.guess, last.result)
        return last

    def amend(self, index: int, result: str) -> Optional[RoundReport]:
        """
        Replace the feedback of round `index` (0-based) and replay the history.
        Rounds after one that now ends the game are discarded.
        """
        if index < 0 or index >= len(self._history):
            raise IndexError(f"round index out of range: {index}")
        if not is_valid_result(result) or len(result.strip()) != self.word_length:
            raise InvalidFeedbackFormat(f"invalid result for round {index + 1}: {result!r}")
        entries = list(self._history)
        entries[index] = HistoryEntry(entries[index].guess, result.strip().lower())
        return self._replay_history(entries)

    def branch(self) -> "SolverSession":
        """An independent copy for hypothetical play."""
        return copy.deepcopy(self)

    # -------------------------
    # Helpers
    # -------------------------
    def _check_word(self, word: str) -> str:
        if not isinstance(word, str):
            raise TypeError("guess must be a string")
        w = word.strip().lower()
        if len(w) != self.word_length or not (w.isascii() and w.isalpha()):
            raise ValueError(f"guess must be a {self.word_length}-letter alphabetic word, got {word!r}")
        return w

    def _set_phase(self, phase: Phase) -> None:
        if phase is not self._phase:
            log.debug("round %d: %s -> %s", len(self._history) + 1, self._phase.value, phase.value)
            self._phase = phase

    def _replay_history(self, entries: Sequence[HistoryEntry]) -> Optional[RoundReport]:
        self._constraints = create_constraint_state()
        self._candidates = list(self._words)
        self._history = []
        self._override = None
        self._proposal = None
        self._recommended = None
        self._last_report = None
        self._phase = Phase.ROUND_START

        report = None
        for k, entry in enumerate(entries):
            report = self._advance(entry, recommend=(k == len(entries) - 1))
            if self.finished and k < len(entries) - 1:
                log.info("Replay ended at round %d (%s); dropped %d later rounds",
                         k + 1, report.outcome.value, len(entries) - k - 1)
                break
        return report

    def _advance(self, entry: HistoryEntry, *, recommend: bool) -> RoundReport:
        self._history.append(entry)
        self._constraints = apply_feedback(self._constraints, get_guess_feedback(entry.guess, entry.result))
        self._constraints.check_invariants()
        self._candidates = filter_candidates(self._candidates, self._constraints, self._history)
        self._set_phase(Phase.FILTERED)

        self._override = None
        self._proposal = None
        self._recommended = None

        n = len(self._history)
        remaining = len(self._candidates)
        report = RoundReport(
            round=n,
            guess=entry.guess,
            result=entry.result,
            outcome=Outcome.CONTINUE,
            remaining=remaining,
            guesses_left=self.max_rounds - n,
        )

        if is_solved_result(entry.result):
            report.outcome = Outcome.SOLVED
            report.answer = entry.guess
        elif remaining == 0:
            report.outcome = Outcome.EXHAUSTED
        elif remaining == 1:
            report.outcome = Outcome.SOLVED
            report.answer = self._candidates[0]
        elif report.guesses_left <= 0:
            report.outcome = Outcome.FAILED
            report.sample = self._candidates[: self.sample_size]
        elif recommend:
            report.sample = self._candidates[: self.sample_size]
            if n < len(self._replay):
                report.next_guess = self._replay[n]
            else:
                # same order and tie-break as pick_best_guess
                report.ranking = rank_guesses(self._candidates)
                best = report.ranking[0]
                report.next_guess = best["guess"]
                report.next_score = PartitionScore(best["exp_remaining"], best["worst_case"])
                self._recommended = report.next_guess

        if report.outcome is Outcome.CONTINUE:
            self._set_phase(Phase.ROUND_START)
        else:
            self._set_phase(_TERMINAL[report.outcome])
            log.info("Session %s after %d round(s): remaining=%d answer=%s",
                     report.outcome.value, n, remaining, report.answer)

        self._last_report = report
        return report


class GameResult(NamedTuple):
    solved: bool
    guesses: List[str]
    report: RoundReport

    @property
    def steps(self) -> int:
        """Guesses needed, counting the final guess of a word identified by elimination."""
        if self.solved and self.report.answer != self.guesses[-1]:
            return len(self.guesses) + 1
        return len(self.guesses)


def play_game(
    secret: str,
    words: Union[WordVocab, Sequence[str]],
    *,
    max_rounds: int = MAX_ROUNDS,
    opening: Optional[str] = OPENING_GUESS,
) -> GameResult:
    """Self-play: run a session against a known `secret` until it ends."""
    session = SolverSession(words, max_rounds=max_rounds, opening=opening)
    guesses: List[str] = []
    while True:
        guess = session.propose()
        guesses.append(guess)
        report = session.submit(score_guess(secret, guess))
        if report.outcome is not Outcome.CONTINUE:
            return GameResult(report.outcome is Outcome.SOLVED, guesses, report)
