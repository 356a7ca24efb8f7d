import pytest

from wordle_engine.guesser import (
    PartitionScore,
    partition_sizes,
    pick_best_guess,
    rank_guesses,
    score_word_entropy,
    score_word_expected_remaining,
)

POOL = ["abcde", "abcdf", "abcdg", "xyzzy"]
WORDS = [
    "total", "stoal", "allot", "tally", "alloy", "atoll", "crane", "trace",
    "adieu", "cigar", "rebut", "bleed", "blend", "erase", "eerie", "speed",
]


def test_pick_best_guess_trivial_inputs():
    assert pick_best_guess([]) is None
    assert pick_best_guess(None) is None
    assert pick_best_guess(["abcde"]) == "abcde"


def test_exact_ties_go_to_earliest_word():
    assert pick_best_guess(["abcde", "fghij"]) == "abcde"
    assert pick_best_guess(["fghij", "abcde"]) == "fghij"


def test_distinct_letters_break_remaining_ties():
    # both split the pair perfectly; the word with more distinct letters wins
    assert pick_best_guess(["aabcd", "efghi"]) == "efghi"


def test_expected_remaining_values():
    assert partition_sizes("abcde", POOL) == {"ggggg": 1, "ggggx": 2, "xxxxx": 1}
    assert score_word_expected_remaining("abcde", POOL) == PartitionScore(1.5, 2)
    assert score_word_expected_remaining("xyzzy", POOL) == PartitionScore(2.5, 3)
    assert pick_best_guess(POOL) == "abcde"


def test_small_sets():
    assert score_word_expected_remaining("abcde", []) == PartitionScore(0.0, 0)
    assert score_word_expected_remaining("abcde", ["fghij"]) == PartitionScore(1.0, 1)
    assert score_word_entropy("abcde", ["fghij"]) == 0.0
    assert score_word_entropy("abcde", []) == 0.0


def test_entropy():
    assert score_word_entropy("abcde", POOL) == pytest.approx(1.5)
    assert score_word_entropy("abcde", ["abcde", "fghij"]) == pytest.approx(1.0)


def test_partition_metrics_are_consistent():
    n = len(WORDS)
    for guess in WORDS + ["eerie", "zzzzz"]:
        sizes = partition_sizes(guess, WORDS)
        s = score_word_expected_remaining(guess, WORDS)
        assert sum(sizes.values()) == n
        assert s.max_partition_size <= n
        assert s.expected_remaining <= s.max_partition_size


def test_selection_is_deterministic():
    assert pick_best_guess(WORDS) == pick_best_guess(list(WORDS))


def test_rank_guesses_agrees_with_pick_best_guess():
    rows = rank_guesses(WORDS)
    assert len(rows) == len(WORDS)
    assert rows[0]["guess"] == pick_best_guess(WORDS)
    assert set(rows[0]) == {"guess", "exp_remaining", "worst_case", "entropy", "partitions"}
    keys = [(r["exp_remaining"], r["worst_case"]) for r in rows]
    assert keys == sorted(keys)


def test_rank_guesses_with_outside_guesses():
    rows = rank_guesses(POOL, ["xyzzy", "abcde"])
    assert [r["guess"] for r in rows] == ["abcde", "xyzzy"]
    assert rows[0]["partitions"] == 3
    assert rows[1]["exp_remaining"] == pytest.approx(2.5)


def test_rank_guesses_row_types():
    row = rank_guesses(POOL)[0]
    assert isinstance(row["guess"], str)
    assert isinstance(row["exp_remaining"], float)
    assert isinstance(row["worst_case"], int)
    assert isinstance(row["entropy"], float)
    assert isinstance(row["partitions"], int)
