"""
Feedback utilities for Wordle.

Result strings use one code per letter:
- 'g' = green  (letter matches the secret at that position)
- 'y' = yellow (letter present elsewhere in the secret)
- 'x' = gray   (letter absent, or over-used relative to the secret's counts)
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Tuple

from wordle_engine.config import GRAY, GREEN, RESULT_CODES, WORD_LENGTH, YELLOW
from wordle_engine.errors import InvalidFeedbackFormat

_COLOR_NAMES = {GREEN: "green", YELLOW: "yellow", GRAY: "gray"}


class FeedbackItem(NamedTuple):
    index: int
    letter: str
    result: str  # 'green' | 'yellow' | 'gray'


History = Iterable[Tuple[str, str]]  # (guess, result)


def is_valid_result(result: str) -> bool:
    """True iff `result` is non-empty and uses only g/y/x (any case)."""
    if not isinstance(result, str):
        return False
    s = result.strip().lower()
    if not s:
        return False
    return all(ch in RESULT_CODES for ch in s)


def is_solved_result(result: str) -> bool:
    s = result.strip().lower()
    return bool(s) and all(ch == GREEN for ch in s)


def score_guess(secret: str, guess: str) -> str:
    """
    Compute the feedback string for `guess` when the hidden word is `secret`.

    Two-pass rule over the shared prefix (at most WORD_LENGTH letters):
    1) GREENS: every position where the letters match is green and consumes
       that secret position.
    2) YELLOWS: for each remaining guess position, the first unconsumed secret
       position (left to right) holding the same letter turns it yellow and is
       consumed; otherwise the position stays gray.

    Greens always win over yellows, and yellows go to the earliest unclaimed
    copy of a letter, which is what makes duplicate letters come out right:

    >>> score_guess("erase", "eerie")
    'gxyxg'
    """
    a = secret.strip().lower()
    g = guess.strip().lower()
    n = min(len(a), len(g), WORD_LENGTH)
    result = [GRAY] * n
    used = [False] * n

    # Pass 1: greens
    for i in range(n):
        if g[i] == a[i]:
            result[i] = GREEN
            used[i] = True

    # Pass 2: yellows against the earliest unconsumed copy
    for i in range(n):
        if result[i] == GREEN:
            continue
        for j in range(n):
            if not used[j] and a[j] == g[i]:
                result[i] = YELLOW
                used[j] = True
                break

    return "".join(result)


def get_guess_feedback(guess: str, result: str) -> List[FeedbackItem]:
    """
    Pair each guess letter with its result code.

    Raises InvalidFeedbackFormat if `result` is not a valid result string;
    unknown codes are rejected, never mapped to gray.
    """
    if not is_valid_result(result):
        raise InvalidFeedbackFormat(f"result must contain only g/y/x codes, got {result!r}")
    g = guess.strip().lower()
    r = result.strip().lower()
    return [FeedbackItem(i, letter, _COLOR_NAMES[code]) for i, (letter, code) in enumerate(zip(g, r))]


def matches_all_feedback(candidate: str, history: History) -> bool:
    """
    True iff `candidate`, taken as the secret, reproduces every recorded result.
    Independent of any constraint state.
    """
    c = candidate.strip().lower()
    for guess, result in history:
        if score_guess(c, guess) != result.strip().lower():
            return False
    return True
