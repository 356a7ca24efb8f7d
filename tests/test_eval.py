import csv

import pytest

from starting_word.eval import _write_csv, evaluate_first_guesses
from starting_word.eval_whole_game_sim import evaluate_starting_words
from wordle_engine.vocab import WordVocab


def test_evaluate_first_guesses_ranks_best_first(tmp_path):
    answers = ["abcde", "abcdf", "abcdg", "xyzzy"]
    rows = evaluate_first_guesses(answers, ["xyzzy", "abcde", "abc", "ab1de"])
    assert [r["guess"] for r in rows] == ["abcde", "xyzzy"]
    assert rows[0]["exp_remaining"] == pytest.approx(1.5)
    assert rows[0]["worst_case"] == 2

    out = tmp_path / "results.csv"
    _write_csv(rows, str(out))
    with open(out, newline="", encoding="utf-8") as f:
        written = list(csv.DictReader(f))
    assert [r["guess"] for r in written] == ["abcde", "xyzzy"]


def test_evaluate_first_guesses_requires_answers():
    with pytest.raises(ValueError):
        evaluate_first_guesses([])


def test_evaluate_starting_words_solves_small_corpus():
    vocab = WordVocab(["fghij", "fghik", "fghil", "abcde"])
    rows = evaluate_starting_words(vocab, ["fghij", "abcde"], episodes=4, progress=False)
    assert len(rows) == 2
    for r in rows:
        assert r["episodes"] == 4
        assert r["solve_rate"] == 1.0
        assert 1 <= r["avg_steps_solved"] <= 6
    best = {r["guess"]: r for r in rows}
    # opening fghij: 1 + 2 + 3 steps for the fgh* secrets, abcde found by elimination in 2
    assert best["fghij"]["avg_steps_solved"] == pytest.approx(2.0)
