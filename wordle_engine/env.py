"""
env.py

Self-play environment around a SolverSession: the environment hides a secret,
scores each guess against it, and lets the session track constraints and
candidates. Plugs into an RL loop or a benchmark script.
- Discrete actions: indices into the WordVocab
- Observations: an encoding of the session's ConstraintState
- Rewards: shaped by greens/yellows with a per-step penalty and success bonus
"""

from __future__ import annotations

import math
from typing import List, Optional

from wordle_engine.config import ALPHABET_SIZE, GREEN, MAX_ROUNDS, WORD_LENGTH, YELLOW
from wordle_engine.constraints import ConstraintState
from wordle_engine.feedback import score_guess
from wordle_engine.sampler import WordSampler
from wordle_engine.session import Outcome, SolverSession
from wordle_engine.vocab import WordVocab

OBS_SIZE = WORD_LENGTH * ALPHABET_SIZE + 2 * ALPHABET_SIZE + 2


def encode_constraints(state: ConstraintState, remaining: int, step: int, max_steps: int) -> List[float]:
    """
    Fixed-length observation vector for a constraint state.

    Layout:
      - known: 5*26 one-hot of position_known
      - min_counts: 26 lower bounds / word length
      - max_counts: 26 upper bounds / word length (1.0 when unbounded)
      - log_rem: log(1 + remaining)
      - step_scaled: step / max_steps
    """
    L = state.word_length
    known = [0.0] * (L * ALPHABET_SIZE)
    for pos, letter in enumerate(state.position_known):
        if letter is not None:
            known[pos * ALPHABET_SIZE + ord(letter) - 97] = 1.0
    mins = [k / L for k in state.min_counts]
    maxs = [1.0 if k is None else k / L for k in state.max_counts]
    return known + mins + maxs + [math.log1p(remaining), step / max(1, max_steps)]


class WordleEnv:
    """
    Wordle self-play environment.

    API
    ---
    reset(target_idx: Optional[int] = None) -> tuple[list[float], list[int]]
        Starts a new episode. If `target_idx` is provided, uses that word as target (useful for tests).
        Returns (observation, action_mask).

    step(action_idx: int) -> tuple[list[float], float, bool, dict, list[int]]
        Applies a guess. Returns (observation, reward, done, info, action_mask).

    Action Mask
    -----------
    If `allow_probe_guesses` is False, mask allows only current candidates.
    If True, all vocab actions are allowed (probes permitted).
    """

    def __init__(
        self,
        vocab: WordVocab,
        sampler: WordSampler,
        *,
        max_guesses: int = MAX_ROUNDS,
        alpha: float = 2.0,         # reward per green
        beta: float = 1.0,          # reward per yellow
        step_penalty: float = 1.0,  # per-step cost
        success_bonus: float = 10.0,
        allow_probe_guesses: bool = False,
    ) -> None:
        if not isinstance(vocab, WordVocab):
            raise TypeError("vocab must be a WordVocab")
        if not isinstance(sampler, WordSampler):
            raise TypeError("sampler must be a WordSampler")

        self.vocab = vocab
        self.sampler = sampler
        self.max_guesses = int(max_guesses)
        self.alpha = float(alpha)
        self.beta = float(beta)
        self.step_penalty = float(step_penalty)
        self.success_bonus = float(success_bonus)
        self.allow_probe_guesses = bool(allow_probe_guesses)

        self._target_word: Optional[str] = None
        self._session: Optional[SolverSession] = None
        self._done = False
        self._step = 0

    # -------------------------
    # Core env API
    # -------------------------
    def reset(self, target_idx: Optional[int] = None) -> tuple[list[float], list[int]]:
        """Start a new episode and return (observation, action_mask)."""
        if target_idx is None:
            target_idx = self.sampler.choice_index()
        self._target_word = self.vocab.word_at(target_idx)
        self._session = SolverSession(self.vocab, max_rounds=self.max_guesses, opening=None)
        self._done = False
        self._step = 0
        return self._build_observation(), self._build_action_mask()

    def step(self, action_idx: int) -> tuple[list[float], float, bool, dict, list[int]]:
        """
        Take an action (guess index).

        info carries 'guess', 'result', 'remaining', 'step', 'solved',
        'outcome' and, once the episode is over, 'target'.
        """
        if self._session is None:
            raise RuntimeError("call reset() before step()")
        if self._done:
            raise RuntimeError("episode is over; call reset()")
        guess = self.vocab.word_at(action_idx)
        if not self.allow_probe_guesses and guess not in self._session.candidates:
            raise ValueError("action not allowed by current candidate set (set allow_probe_guesses=True to permit probes)")

        result = score_guess(self._target_word, guess)
        self._step += 1
        if not self._session.finished:
            outcome = self._session.submit(result, guess=guess).outcome
        else:
            # answer already pinned down by elimination; it still has to be guessed
            outcome = self._session.last_report.outcome

        greens = result.count(GREEN)
        yellows = result.count(YELLOW)
        reward = self.alpha * greens + self.beta * yellows - self.step_penalty

        solved = greens == len(result)
        if solved:
            reward += self.success_bonus
        self._done = solved or outcome in (Outcome.EXHAUSTED, Outcome.FAILED) or self._step >= self.max_guesses

        info = {
            "guess": guess,
            "result": result,
            "remaining": len(self._session.candidates),
            "step": self._step,
            "solved": solved,
            "outcome": outcome.value,
            "target": self._target_word if self._done else None,
        }
        return self._build_observation(), reward, self._done, info, self._build_action_mask()

    # -------------------------
    # Helpers
    # -------------------------
    def _build_action_mask(self) -> list[int]:
        """Return a 0/1 mask over the entire vocab."""
        n = len(self.vocab)
        if self.allow_probe_guesses:
            return [1] * n
        allowed = {self.vocab.index_of(w) for w in self._session.candidates}
        return [1 if i in allowed else 0 for i in range(n)]

    def _build_observation(self) -> list[float]:
        return encode_constraints(
            self._session.constraints,
            len(self._session.candidates),
            self._step,
            self.max_guesses,
        )

    # -------------------------
    # Introspection helpers
    # -------------------------
    @property
    def session(self) -> Optional[SolverSession]:
        return self._session

    @property
    def target(self) -> Optional[str]:
        return self._target_word

    @property
    def remaining_candidates(self) -> int:
        return len(self._session.candidates) if self._session else 0
