"""
starting_word/eval.py

Score candidate first guesses by how well they split the answer set.

Metrics per guess:
- exp_remaining: expected remaining candidates after the first feedback
- worst_case: size of the largest bucket (lower is better)
- entropy: information gain (higher is better)
- partitions: number of distinct feedback patterns induced

Usage:
  python -m starting_word.eval
  python -m starting_word.eval --words word_list.csv --all --top 30 --limit-guesses 500
"""

from __future__ import annotations

import argparse
import csv
import time
from typing import Dict, List

from wordle_engine.guesser import rank_guesses
from wordle_engine.vocab import load_answer_vocab, load_words


def evaluate_first_guesses(
    answers: List[str],
    guesses: List[str] | None = None,
    *,
    progress: bool = False,
) -> List[Dict[str, object]]:
    """
    Evaluate each candidate first guess against the full answer set.

    Parameters
    ----------
    answers : list[str]
        The set of possible targets.
    guesses : list[str] | None
        Candidate guesses to score. If None, uses `answers`.
    progress : bool
        If True, prints a progress line every 100 guesses.

    Returns
    -------
    list[dict]
        Sorted list (best first) of records with keys:
        'guess', 'exp_remaining', 'worst_case', 'entropy', 'partitions'
    """
    if not answers:
        raise ValueError("answers must be non-empty")
    word_len = len(answers[0])
    pool = [g for g in (guesses if guesses is not None else answers) if len(g) == word_len and g.isalpha()]

    rows: List[Dict[str, object]] = []
    for start in range(0, len(pool), 100):
        rows.extend(rank_guesses(answers, pool[start:start + 100]))
        if progress:
            print(f"Scored {min(start + 100, len(pool))}/{len(pool)} guesses...", flush=True)
    # chunks are sorted individually; restore the global order (stable on ties)
    rows.sort(key=lambda r: (r["exp_remaining"], r["worst_case"], -len(set(r["guess"]))))
    return rows


def _print_top(results: List[Dict[str, object]], k: int = 20) -> None:
    print(f"\nTop {k} starting words by expected remaining:")
    print(f"{'rank':>4}  {'guess':<8}  {'exp_rem':>8}  {'entropy':>8}  {'worst':>5}  {'parts':>6}")
    for idx, r in enumerate(results[:k], start=1):
        print(
            f"{idx:>4}  {r['guess']:<8}  {r['exp_remaining']:>8.2f}  {r['entropy']:>8.3f}  {int(r['worst_case']):>5}  {int(r['partitions']):>6}"
        )


def _write_csv(results: List[Dict[str, object]], path: str) -> None:
    fieldnames = ["guess", "exp_remaining", "worst_case", "entropy", "partitions"]
    with open(path, mode="w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in results:
            writer.writerow(row)


def main(argv: List[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Rank Wordle opening guesses by expected remaining candidates.")
    ap.add_argument("--words", "--csv", dest="words", default="word_list.csv", help="Word list file")
    ap.add_argument("--all", action="store_true", help="Use every word as a target, not only rows with a 'day'")
    ap.add_argument("--limit-guesses", type=int, default=None, help="Evaluate only the first K guesses")
    ap.add_argument("--top", type=int, default=20, help="How many top rows to print")
    ap.add_argument("--out", default="starting_word_results.csv", help="Output CSV path")
    args = ap.parse_args(argv)

    vocab = load_words(args.words) if args.all else load_answer_vocab(args.words)
    answers = vocab.words()
    guesses = answers[: args.limit_guesses] if args.limit_guesses is not None else answers

    print(f"Scoring {len(guesses)} guesses against {len(answers)} answers...", flush=True)
    t0 = time.perf_counter()
    results = evaluate_first_guesses(answers, guesses, progress=True)
    print(f"Done in {time.perf_counter() - t0:.2f}s", flush=True)
    _print_top(results, k=args.top)
    _write_csv(results, args.out)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
