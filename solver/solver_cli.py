"""
solver/solver_cli.py

Interactive Wordle helper (human-in-the-loop):
- The solver suggests a guess (round 1 uses the opening word); you play it,
  or type any other word to use that instead.
- Paste the feedback you saw; the solver prunes candidates and shows the top
  suggestions for the next round. Repeat until solved.
- Feedback accepted as: 'xgygx' (b works for x too), '01210', or a
  Python-like list '[0, 1, 2, 1, 0]' (0 absent, 1 present, 2 correct).

Run:
  python -m solver.solver_cli --words word_list.csv

Shortcuts:
  quit / q / exit  -> exit
  undo             -> drop the last round and enter its feedback again
  override WORD    -> guess WORD this round instead of the suggestion
"""
from __future__ import annotations

import argparse
import logging
import re
from typing import List

from wordle_engine.config import MAX_ROUNDS, OPENING_GUESS, WORD_LENGTH
from wordle_engine.errors import InvalidFeedbackFormat, NoSelectableGuess
from wordle_engine.session import Outcome, RoundReport, SolverSession
from wordle_engine.vocab import WordVocab, load_answer_vocab, load_words

QUIT = {"q", "quit", "exit"}
_DIGITS = {"0": "x", "1": "y", "2": "g"}


def parse_feedback(s: str, length: int = WORD_LENGTH) -> str:
    """Normalize a typed feedback into a g/y/x result string.
    Accepted forms:
      - letters: g/y/x  (b is read as x)
      - digits:  2/1/0
      - list:   [0, 1, 2, 2, 0]
    Raises InvalidFeedbackFormat on invalid input.
    """
    s = s.strip().lower()
    if s.startswith("[") and s.endswith("]"):
        nums = re.findall(r"[012]", s)
        if len(nums) != length:
            raise InvalidFeedbackFormat(f"list form must contain exactly {length} 0/1/2 values")
        return "".join(_DIGITS[x] for x in nums)

    if len(s) != length:
        raise InvalidFeedbackFormat(f"feedback must be length {length} (xgygx / 01210 / [0,1,2,1,0])")
    if s.isdigit():
        if any(ch not in _DIGITS for ch in s):
            raise InvalidFeedbackFormat("digit feedback must use only 0/1/2")
        return "".join(_DIGITS[ch] for ch in s)
    s = s.replace("b", "x")
    if any(ch not in "gyx" for ch in s):
        raise InvalidFeedbackFormat("Result must contain only x, g, or y (e.g. xgygx)")
    return s


def _load_vocab(path: str, column: str, answers_only: bool) -> WordVocab:
    if answers_only:
        return load_answer_vocab(path, column=column)
    return load_words(path, column=column)


def _print_report(report: RoundReport, session: SolverSession, top: int) -> None:
    print(f"Remaining options: {report.remaining}")
    if report.outcome is Outcome.SOLVED:
        print(f"\nYou got it! The answer is: {report.answer}")
        return
    if report.outcome is Outcome.EXHAUSTED:
        print("No options left. Check your feedback inputs (type 'undo' to recolor the last guess).")
        return
    if report.outcome is Outcome.FAILED:
        more = " ..." if report.remaining > len(report.sample) else ""
        print(
            "\nOut of guesses - didn't solve it. Possible answers: "
            f"{', '.join(report.sample)}{more} ({report.remaining} total)."
        )
        return

    if report.remaining <= 10:
        print("Candidates:", ", ".join(session.candidates))
    if report.guaranteed:
        print(f"{report.remaining} option(s) left and {report.guesses_left} guess(es) remaining - guaranteed to solve it!")
    elif report.at_risk:
        print(
            f"Warning: {report.remaining} options left but only {report.guesses_left} "
            "guess(es) remaining - might not solve in time."
        )
    if top > 1:
        print("Top suggestions:")
        for i, r in enumerate(report.ranking[:top], 1):
            print(f"  {i}. {r['guess']}  (exp_rem={r['exp_remaining']:.2f}, worst={int(r['worst_case'])}, H={r['entropy']:.3f})")
    if report.next_score is not None:
        print(
            f"Next guess: {report.next_guess} (expected remaining: {report.next_score.expected_remaining:.1f}, "
            f"max partition: {report.next_score.max_partition_size}, lower is better)"
        )


def run(session: SolverSession, top: int = 3) -> None:
    while not session.finished:
        try:
            guess = session.propose()
        except NoSelectableGuess:
            print("No candidates remain. Check your feedback inputs.")
            return

        print(f"\n--- Round {session.round + 1} ---")
        print("Guess:", guess)
        fb = input("Result (or a different word to guess, 'undo', 'quit'): ").strip().lower()
        if fb in QUIT:
            print("bye!")
            return
        if fb == "undo":
            try:
                last = session.undo()
            except ValueError as e:
                print(e)
                continue
            print(f"Dropped round {session.round + 1} ({last.guess} {last.result}).")
            continue
        if fb.startswith("override "):
            try:
                session.override(fb[len("override "):])
            except ValueError as e:
                print(e)
            continue
        if fb.isalpha() and len(fb) == session.word_length and not set(fb) <= set("gyxb"):
            session.override(fb)
            continue

        try:
            report = session.submit(parse_feedback(fb, session.word_length))
        except InvalidFeedbackFormat as e:
            print("Invalid feedback:", e)
            continue

        _print_report(report, session, top)
        if report.outcome is Outcome.EXHAUSTED:
            again = input("Type 'undo' to recolor the last guess, anything else to stop: ").strip().lower()
            if again == "undo":
                last = session.undo()
                print(f"Dropped round {session.round + 1} ({last.guess} {last.result}).")


def main(argv: List[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Interactive Wordle solver (manual feedback)")
    ap.add_argument("--words", "--csv", dest="words", default="word_list.csv",
                    help="Word list (.csv with a word column, .json array, or one word per line)")
    ap.add_argument("--column", default="word", help="CSV column holding the words")
    ap.add_argument("--answers-only", action="store_true", help="Keep only CSV rows with a 'day' value")
    ap.add_argument("--extra", nargs="*", default=[], help="Extra words to add to the corpus")
    ap.add_argument("--max-rounds", type=int, default=MAX_ROUNDS, help="Round budget")
    ap.add_argument("--opening", default=OPENING_GUESS, help="First guess ('' lets the solver pick)")
    ap.add_argument("--top", type=int, default=3, help="How many ranked suggestions to print")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    vocab = _load_vocab(args.words, args.column, args.answers_only)
    if args.extra:
        vocab = vocab.with_words(args.extra)

    print(f"\nWordle helper - {len(vocab)} words loaded.")
    print("After EACH guess, paste the feedback: x/g/y, 0/1/2, or [0,1,2,1,0]. Type 'quit' to exit.")
    session = SolverSession(vocab, max_rounds=args.max_rounds, opening=args.opening or None)
    run(session, top=args.top)


if __name__ == "__main__":
    main()
