from collections import Counter

import pytest

from wordle_engine.errors import InvalidFeedbackFormat
from wordle_engine.feedback import (
    FeedbackItem,
    get_guess_feedback,
    is_solved_result,
    is_valid_result,
    matches_all_feedback,
    score_guess,
)

WORDS = [
    "total", "stoal", "allot", "tally", "alloy", "atoll", "crane", "trace",
    "adieu", "cigar", "rebut", "bleed", "blend", "erase", "eerie", "speed",
    "geese", "lever", "cabin", "abbey", "spree", "press",
]


@pytest.mark.parametrize(
    "secret, guess, expected",
    [
        ("erase", "eerie", "gxyxg"),
        ("total", "allot", "yyxyy"),
        ("cabin", "abbey", "yxgxx"),
        ("spree", "press", "yyyyx"),
        ("crane", "eerie", "xxyxg"),
        ("geese", "eerie", "ygxxg"),
        ("lever", "eerie", "ygyxx"),
        ("speed", "speed", "ggggg"),
        ("crane", "adieu", "yxxyx"),
    ],
)
def test_score_guess_duplicate_letters(secret, guess, expected):
    assert score_guess(secret, guess) == expected


def test_score_guess_uses_shared_prefix_and_ignores_case():
    assert score_guess("ab", "abc") == "gg"
    assert score_guess("CRANE", " crane ") == "ggggg"
    assert score_guess("crane", "") == ""


def test_score_guess_counts_agree_with_letters():
    for secret in WORDS:
        for guess in WORDS:
            res = score_guess(secret, guess)
            assert res.count("g") == sum(1 for a, b in zip(secret, guess) if a == b)
            marked = Counter(ch for ch, code in zip(guess, res) if code in "gy")
            sc, gc = Counter(secret), Counter(guess)
            for letter, k in marked.items():
                assert k <= min(sc[letter], gc[letter])


@pytest.mark.parametrize("s", ["gyxxg", "GYXXG", " xxxxx ", "g", "yyyyyyy"])
def test_is_valid_result_accepts(s):
    assert is_valid_result(s)


@pytest.mark.parametrize("s", ["", "   ", "gyb", "01210", "gy xg", None])
def test_is_valid_result_rejects(s):
    assert not is_valid_result(s)


def test_is_solved_result():
    assert is_solved_result("GGGGG")
    assert not is_solved_result("ggggx")
    assert not is_solved_result("")


def test_get_guess_feedback_items():
    items = get_guess_feedback("Eerie", "GXYXG")
    assert items == [
        FeedbackItem(0, "e", "green"),
        FeedbackItem(1, "e", "gray"),
        FeedbackItem(2, "r", "yellow"),
        FeedbackItem(3, "i", "gray"),
        FeedbackItem(4, "e", "green"),
    ]


def test_get_guess_feedback_rejects_unknown_codes():
    with pytest.raises(InvalidFeedbackFormat):
        get_guess_feedback("crane", "gxbxg")
    with pytest.raises(ValueError):
        get_guess_feedback("crane", "")


def test_matches_all_feedback_true_secret():
    secret = "total"
    history = [(g, score_guess(secret, g)) for g in ("crane", "allot", "stoal")]
    assert matches_all_feedback(secret, history)
    assert matches_all_feedback(secret, [])


def test_matches_all_feedback_other_words():
    secret = "total"
    history = [(g, score_guess(secret, g)) for g in ("crane", "allot")]
    for w in WORDS:
        same = all(score_guess(w, g) == r for g, r in history)
        assert matches_all_feedback(w, history) is same
    assert not matches_all_feedback("allot", history)
    assert matches_all_feedback("stoal", history)
