import pytest

from wordle_engine.constraints import (
    _li,
    apply_feedback,
    create_constraint_state,
    filter_candidates,
    is_valid_candidate,
    rebuild_constraints,
)
from wordle_engine.errors import ConstraintViolation
from wordle_engine.feedback import FeedbackItem, get_guess_feedback, matches_all_feedback, score_guess

WORDS = [
    "total", "stoal", "allot", "tally", "alloy", "atoll", "crane", "trace",
    "adieu", "cigar", "rebut", "bleed", "blend", "erase", "eerie", "speed",
    "geese", "lever", "cabin", "abbey", "spree", "press",
]


def _after(secret, *guesses):
    state = create_constraint_state()
    for g in guesses:
        state = apply_feedback(state, get_guess_feedback(g, score_guess(secret, g)))
    return state


def test_duplicate_letter_rules():
    state = apply_feedback(create_constraint_state(), get_guess_feedback("eerie", "gxyxg"))
    e, r, i = _li("e"), _li("r"), _li("i")

    assert state.position_known == ["e", None, None, None, "e"]
    # gray 'e' at 1 while 'e' is green elsewhere: excluded from slot 1 only
    assert state.must_contain[e] == {1}
    assert state.min_counts[e] == 2
    assert state.max_counts[e] == 2
    assert state.must_contain[r] == {2}
    assert state.min_counts[r] == 1
    assert state.max_counts[r] is None
    # gray-only letter: absent
    assert state.max_counts[i] == 0
    assert state.min_counts[i] == 0
    assert not state.must_contain[i]


def test_apply_feedback_returns_new_state():
    empty = create_constraint_state()
    state = apply_feedback(empty, get_guess_feedback("crane", "gyxxx"))
    assert state is not empty
    assert empty == create_constraint_state()
    assert state.position_known[0] == "c"


def test_known_positions_are_never_changed():
    state = apply_feedback(create_constraint_state(), [FeedbackItem(0, "a", "green")])
    state = apply_feedback(state, [FeedbackItem(0, "b", "green")])
    assert state.position_known[0] == "a"


def test_contradicting_max_bound_is_dropped():
    state = apply_feedback(
        create_constraint_state(),
        [FeedbackItem(0, "e", "green"), FeedbackItem(1, "e", "yellow")],
    )
    state = apply_feedback(state, [FeedbackItem(2, "e", "gray")])
    assert state.min_counts[_li("e")] == 2
    assert state.max_counts[_li("e")] is None
    state.check_invariants()


def test_check_invariants_flags_bad_state():
    state = create_constraint_state()
    state.min_counts[_li("a")] = 2
    state.max_counts[_li("a")] = 1
    with pytest.raises(ConstraintViolation):
        state.check_invariants()
    with pytest.raises(AssertionError):
        state.check_invariants()


def test_apply_feedback_rejects_bad_items():
    with pytest.raises(ValueError):
        apply_feedback(create_constraint_state(), [FeedbackItem(0, "1", "gray")])
    with pytest.raises(ValueError):
        apply_feedback(create_constraint_state(), [FeedbackItem(7, "a", "gray")])
    empty = create_constraint_state()
    with pytest.raises(ValueError):
        apply_feedback(empty, [FeedbackItem(0, "a", "blue")])
    assert empty == create_constraint_state()


def test_applying_same_feedback_twice_is_idempotent():
    for secret in WORDS:
        for guess in ("eerie", "allot", "crane", "press"):
            items = get_guess_feedback(guess, score_guess(secret, guess))
            once = apply_feedback(create_constraint_state(), items)
            twice = apply_feedback(once, items)
            assert twice == once


def test_min_counts_never_decrease():
    state = create_constraint_state()
    for guess in ("eerie", "crane", "lever"):
        new = apply_feedback(state, get_guess_feedback(guess, score_guess("geese", guess)))
        assert all(b >= a for a, b in zip(state.min_counts, new.min_counts))
        state = new


def test_true_secret_never_eliminated():
    for secret in WORDS:
        for g1 in WORDS:
            state = _after(secret, g1)
            assert is_valid_candidate(secret, state), (secret, g1)
            for g2 in ("eerie", "allot"):
                assert is_valid_candidate(secret, _after(secret, g1, g2)), (secret, g1, g2)


def test_history_consistent_words_pass_constraints():
    for secret in WORDS:
        for g1, g2 in (("crane", "allot"), ("eerie", "speed"), ("abbey", "press")):
            history = [(g, score_guess(secret, g)) for g in (g1, g2)]
            state = rebuild_constraints(history)
            for w in WORDS:
                if matches_all_feedback(w, history):
                    assert is_valid_candidate(w, state), (secret, w, history)


def test_is_valid_candidate_rules():
    state = apply_feedback(create_constraint_state(), get_guess_feedback("eerie", "gxyxg"))
    assert is_valid_candidate("erase", state)
    assert not is_valid_candidate("eerie", state)   # 'e' excluded from slot 1, 'r' from slot 2
    assert not is_valid_candidate("elope", state)   # no 'r'
    assert not is_valid_candidate("erede", state)   # three 'e' exceeds max of 2
    assert not is_valid_candidate("ariee", state)   # slot 0 must be 'e'
    assert not is_valid_candidate("erie", state)    # too short for slot 4


def test_rebuild_constraints_matches_fold():
    history = [("crane", score_guess("total", "crane")), ("allot", score_guess("total", "allot"))]
    assert rebuild_constraints(history) == _after("total", "crane", "allot")
    assert rebuild_constraints([]) == create_constraint_state()


def test_copy_is_independent():
    state = _after("total", "allot")
    clone = state.copy()
    clone.must_contain[_li("a")].add(4)
    clone.min_counts[_li("z")] = 3
    assert state != clone
    assert 4 not in state.must_contain[_li("a")]


def test_filter_candidates_keeps_order():
    history = [("crane", score_guess("total", "crane"))]
    state = rebuild_constraints(history)
    assert filter_candidates(WORDS, state, history) == ["total", "stoal", "allot", "tally", "alloy", "atoll"]
