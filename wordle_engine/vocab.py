from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from wordle_engine.config import WORD_LENGTH

log = logging.getLogger(__name__)


def _clean_words(
    raw: Iterable[object],
    *,
    word_len: int = WORD_LENGTH,
    lowercase: bool = True,
    dedupe: bool = True,
    alpha_only: bool = True,
) -> List[str]:
    """Normalize raw values into a list of fixed-length words (first occurrence wins)."""
    clean: List[str] = []
    seen = set()
    for val in raw:
        if not isinstance(val, str):
            val = str(val) if val is not None else ""
        w = val.strip()
        w = w.lower() if lowercase else w

        if len(w) != word_len:
            continue
        if alpha_only and not (w.isascii() and w.isalpha()):
            continue
        if dedupe:
            if w in seen:
                continue
            seen.add(w)
        clean.append(w)
    return clean


class WordVocab:
    """An ordered, duplicate-free word corpus: the initial candidate set of a game."""

    def __init__(self, words: List[str]) -> None:
        if not isinstance(words, list):
            raise TypeError("`words` must be a list of strings")
        if not words:
            raise ValueError("no words provided")
        if not all(isinstance(w, str) for w in words):
            raise TypeError("all items in `words` must be str")
        if len(set(words)) != len(words):
            raise ValueError("duplicate words detected; input to WordVocab must be deduplicated")

        self._words: List[str] = list(words)
        self._index = {w: i for i, w in enumerate(self._words)}

    # ---------- Construction helpers ----------

    @classmethod
    def from_csv(cls, path: str, column: str = "word", *, word_len: int = WORD_LENGTH) -> "WordVocab":
        """
        Load words from the `column` column of a CSV file.

        Words are lowercased, non-alphabetic or wrong-length entries dropped,
        and later duplicates discarded.

        Raises
        ------
        FileNotFoundError, KeyError, ValueError
        """
        df = pd.read_csv(path)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")
        return cls._from_raw(df[column].tolist(), path, word_len)

    @classmethod
    def from_json(cls, path: str, *, word_len: int = WORD_LENGTH) -> "WordVocab":
        """Load a JSON array of words, e.g. ["aback", "abase", ...]."""
        series = pd.read_json(path, typ="series", dtype=False, convert_dates=False)
        return cls._from_raw(series.tolist(), path, word_len)

    @classmethod
    def from_text(cls, path: str, *, word_len: int = WORD_LENGTH) -> "WordVocab":
        """Load a plain word list, one word per line."""
        df = pd.read_csv(path, header=None, names=["word"], dtype=str, skip_blank_lines=True)
        return cls._from_raw(df["word"].tolist(), path, word_len)

    @classmethod
    def _from_raw(cls, raw: List[object], path: str, word_len: int) -> "WordVocab":
        clean = _clean_words(raw, word_len=word_len)
        if not clean:
            raise ValueError(f"no valid {word_len}-letter words in {path}")
        log.info("Loaded %d words from %s (%d dropped)", len(clean), path, len(raw) - len(clean))
        return cls(clean)

    def with_words(self, extra: Iterable[str]) -> "WordVocab":
        """Return a new vocab with `extra` words appended (duplicates and invalid words skipped)."""
        word_len = len(self._words[0])
        added = [w for w in _clean_words(extra, word_len=word_len) if w not in self._index]
        if added:
            log.debug("Adding %d extra words: %s", len(added), ", ".join(added))
        return WordVocab(self._words + added)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        return len(self._words)

    def words(self) -> List[str]:
        """Return a copy of the internal word list (to avoid external mutation)."""
        return list(self._words)

    def contains(self, word: str) -> bool:
        return word in self._index

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]


def load_answer_vocab(csv_path: str, column: str = "word") -> WordVocab:
    """
    Load only the official answers from a word_list.csv.
    Keeps rows where 'day' is not null; without a 'day' column every row is kept.
    """
    df = pd.read_csv(csv_path)
    if "day" in df.columns:
        df = df[df["day"].notna()].copy()
    if column not in df.columns:
        raise KeyError(f"column '{column}' not found in {csv_path}")
    return WordVocab._from_raw(df[column].tolist(), csv_path, WORD_LENGTH)


def load_words(path: str, column: str = "word") -> WordVocab:
    """Load a corpus, picking the reader from the file suffix (.csv, .json, anything else = text)."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return WordVocab.from_csv(path, column=column)
    if suffix == ".json":
        return WordVocab.from_json(path)
    return WordVocab.from_text(path)
