"""
starting_word/eval_whole_game_sim.py

Simulate *full games* to evaluate starting words.
For each starting word, sample secrets and let a SolverSession play until
solved or out of rounds, following its own recommendations after the opening.

Usage examples:
  python -m starting_word.eval_whole_game_sim --episodes 300 --first raise irate slate crane
  python -m starting_word.eval_whole_game_sim --episodes 200 --all --limit-guesses 100

Outputs a CSV with metrics per starting word and prints the top K.
"""

from __future__ import annotations

import argparse
import csv
import time
from typing import Dict, List

import numpy as np

from wordle_engine.config import MAX_ROUNDS
from wordle_engine.sampler import WordSampler
from wordle_engine.session import play_game
from wordle_engine.vocab import WordVocab, load_answer_vocab, load_words


def evaluate_starting_words(
    vocab: WordVocab,
    guesses: List[str],
    *,
    episodes: int = 200,
    max_rounds: int = MAX_ROUNDS,
    seed: int = 0,
    progress: bool = True,
) -> List[Dict[str, object]]:
    """
    Play `episodes` games per opening guess against the same sampled secrets.
    Secrets are drawn without replacement, so episodes > len(vocab) is capped.
    """
    secrets = WordSampler(vocab, seed=seed).sample_words(episodes)
    words = vocab.words()
    results: List[Dict[str, object]] = []

    for gi, g in enumerate(guesses, start=1):
        steps_list: List[int] = []
        for secret in secrets:
            game = play_game(secret, words, max_rounds=max_rounds, opening=g)
            if game.solved and game.steps <= max_rounds:
                steps_list.append(game.steps)

        steps = np.asarray(steps_list, dtype=float)
        solved = int(steps.size)
        results.append(
            {
                "guess": g,
                "episodes": len(secrets),
                "solve_rate": round(solved / len(secrets), 4),
                "avg_steps_solved": round(float(steps.mean()), 3) if solved else float("nan"),
                "median_steps": float(np.median(steps)) if solved else float("nan"),
                "p90_steps": float(np.percentile(steps, 90)) if solved else float("nan"),
                "max_steps": int(steps.max()) if solved else 0,
                "solved": solved,
            }
        )
        if progress and gi % 10 == 0:
            print(f"Evaluated {gi}/{len(guesses)} starting words...", flush=True)

    results.sort(key=lambda r: (-r["solve_rate"], r["avg_steps_solved"] if r["solved"] else 1e9))
    return results


def _write_csv(rows: List[Dict[str, object]], path: str) -> None:
    if not rows:
        return
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)


def main(argv: List[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Whole-game evaluation of Wordle starting words.")
    ap.add_argument("--words", "--csv", dest="words", default="word_list.csv", help="Word list file")
    ap.add_argument("--all", action="store_true", help="Use every word, not only rows with a 'day'")
    ap.add_argument("--episodes", type=int, default=200, help="Games per starting word")
    ap.add_argument("--first", nargs="*", default=None, help="Explicit list of starting guesses to test")
    ap.add_argument("--limit-guesses", type=int, default=None, help="Evaluate only the first K guesses")
    ap.add_argument("--max-rounds", type=int, default=MAX_ROUNDS, help="Round budget per game")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for secret sampling")
    ap.add_argument("--out", default="whole_game_results.csv", help="Output CSV path")
    ap.add_argument("--top", type=int, default=10, help="How many top rows to print")
    args = ap.parse_args(argv)

    vocab = load_words(args.words) if args.all else load_answer_vocab(args.words)
    guesses = [w.lower() for w in args.first] if args.first else vocab.words()
    if args.limit_guesses is not None:
        guesses = guesses[: args.limit_guesses]

    print(f"Evaluating {len(guesses)} starting words over {args.episodes} games each", flush=True)
    t0 = time.perf_counter()
    rows = evaluate_starting_words(
        vocab, guesses, episodes=args.episodes, max_rounds=args.max_rounds, seed=args.seed
    )
    print(f"Done in {time.perf_counter() - t0:.2f}s", flush=True)

    for r in rows[: args.top]:
        print(r)

    _write_csv(rows, args.out)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
