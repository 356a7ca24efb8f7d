"""
errors.py

Exceptions raised by the solver. Recoverable conditions that are part of a
normal game (no candidates left, rounds used up) are reported as outcomes on
a RoundReport instead; see wordle_engine.session.
"""


class SolverError(Exception):
    """Base class for solver errors."""


class InvalidFeedbackFormat(SolverError, ValueError):
    """A result string is empty, has the wrong length, or uses unknown codes."""


class NoSelectableGuess(SolverError):
    """No guess can be proposed because the candidate set is empty."""


class SessionOver(SolverError):
    """Feedback was submitted to a session that already reached a terminal outcome."""


class ConstraintViolation(SolverError, AssertionError):
    """Internal constraint state is contradictory (max bound below min bound)."""
