"""
config.py

Shared defaults for the engine, the session layer and the entry points.
Constructors and CLIs take these as keyword/flag defaults; override there.
"""

# Puzzle shape
WORD_LENGTH = 5
ALPHABET_SIZE = 26

# Session
MAX_ROUNDS = 6
OPENING_GUESS = "arise"
REPORT_SAMPLE_SIZE = 10  # candidates shown when rounds run out

# Result codes
GREEN = "g"   # correct position
YELLOW = "y"  # present elsewhere
GRAY = "x"    # absent
RESULT_CODES = (GREEN, YELLOW, GRAY)
