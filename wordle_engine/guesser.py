"""
guesser.py

Score prospective guesses by how they split the current candidates and pick
the next guess.

Metrics per guess (n = number of candidates, c_i = size of feedback class i):
- expected_remaining: sum(c_i^2) / n, the expected candidate count after the
  guess if the secret is uniform over the candidates (lower is better)
- max_partition_size: size of the largest class, the worst case (lower is better)
- entropy: information in bits (higher is better); not used by pick_best_guess
"""

from __future__ import annotations

from collections import defaultdict
from math import log2
from typing import Dict, List, NamedTuple, Optional, Sequence

from wordle_engine.feedback import score_guess


class PartitionScore(NamedTuple):
    expected_remaining: float
    max_partition_size: int


def partition_sizes(guess: str, candidates: Sequence[str]) -> Dict[str, int]:
    """Histogram: result string -> number of candidates producing it for `guess`."""
    counts: Dict[str, int] = defaultdict(int)
    for answer in candidates:
        counts[score_guess(answer, guess)] += 1
    return counts


def score_word_expected_remaining(guess: str, candidates: Sequence[str]) -> PartitionScore:
    n = len(candidates)
    if n <= 1:
        return PartitionScore(float(n), n)
    counts = partition_sizes(guess, candidates)
    sum_squares = sum(c * c for c in counts.values())
    return PartitionScore(sum_squares / n, max(counts.values()))


def score_word_entropy(guess: str, candidates: Sequence[str]) -> float:
    n = len(candidates)
    if n <= 1:
        return 0.0
    entropy = 0.0
    for c in partition_sizes(guess, candidates).values():
        p = c / n
        entropy -= p * log2(p)
    return entropy


def _distinct_letters(word: str) -> int:
    return len(set(word.lower()))


def pick_best_guess(candidates: Optional[Sequence[str]]) -> Optional[str]:
    """
    Choose the candidate minimizing (expected_remaining, max_partition_size,
    -distinct_letters). Scans in input order and only replaces the current
    best on strict improvement, so exact ties go to the earliest word.

    Returns None for an empty (or missing) candidate list.
    """
    if not candidates:
        return None
    if len(candidates) == 1:
        return candidates[0]

    best: Optional[str] = None
    best_key = None
    for word in candidates:
        s = score_word_expected_remaining(word, candidates)
        key = (s.expected_remaining, s.max_partition_size, -_distinct_letters(word))
        if best_key is None or key < best_key:
            best = word
            best_key = key
    return best


def rank_guesses(candidates: Sequence[str], guesses: Optional[Sequence[str]] = None) -> List[Dict[str, object]]:
    """
    Score every guess (default: the candidates themselves) against `candidates`.

    Returns rows with keys 'guess', 'exp_remaining', 'worst_case', 'entropy',
    'partitions', best first. The sort key matches pick_best_guess and the sort
    is stable, so rows[0]['guess'] == pick_best_guess(candidates) when
    `guesses` is omitted and there are at least two candidates.
    """
    pool = candidates if guesses is None else guesses
    n = len(candidates)
    rows: List[Dict[str, object]] = []
    for g in pool:
        counts = partition_sizes(g, candidates)
        if n <= 1:
            exp_remaining, worst_case, entropy = float(n), n, 0.0
        else:
            exp_remaining = sum(c * c for c in counts.values()) / n
            worst_case = max(counts.values())
            entropy = -sum((c / n) * log2(c / n) for c in counts.values())
        rows.append(
            {
                "guess": g,
                "exp_remaining": float(exp_remaining),
                "worst_case": int(worst_case),
                "entropy": float(entropy),
                "partitions": int(len(counts)),
            }
        )
    rows.sort(key=lambda r: (r["exp_remaining"], r["worst_case"], -_distinct_letters(r["guess"])))
    return rows
