from __future__ import annotations

import random
from typing import List

from wordle_engine.vocab import WordVocab


class WordSampler:
    """Seeded choice of hidden secrets for self-play; the solver itself never samples."""

    def __init__(self, vocab: WordVocab, seed: int | None = None) -> None:
        if not isinstance(vocab, WordVocab):
            raise TypeError("vocab must be a WordVocab")
        if len(vocab) == 0:
            raise ValueError("vocab is empty")
        self._vocab = vocab
        self._rng = random.Random(seed)

    def set_seed(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def choice_index(self) -> int:
        return self._rng.randrange(len(self._vocab))

    def choice_word(self) -> str:
        return self._vocab.word_at(self.choice_index())

    def sample_words(self, k: int) -> List[str]:
        """Up to `k` distinct secrets (all words, shuffled, if k exceeds the vocab)."""
        if not isinstance(k, int) or k <= 0:
            raise ValueError("k must be a positive integer")
        words = self._vocab.words()
        return self._rng.sample(words, min(k, len(words)))
