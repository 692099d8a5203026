from __future__ import annotations

import numpy as np

from boggle import alphabet
from boggle.board import Board


class Histogram:
    """Per-letter occurrence counts on a board, indexed by alphabet index."""

    __slots__ = ("_counts",)

    def __init__(self, counts: np.ndarray):
        counts = np.array(counts, dtype=np.int64)
        if counts.shape != (alphabet.ALPHABET_SIZE,):
            raise ValueError(f"Histogram needs {alphabet.ALPHABET_SIZE} counts, got shape {counts.shape}")
        counts.flags.writeable = False
        self._counts = counts

    def count(self, letter: str) -> int:
        return int(self._counts[alphabet.index(letter)])

    def has(self, idx: int) -> bool:
        return self._counts[idx] > 0

    @property
    def total(self) -> int:
        return int(self._counts.sum())

    def as_dict(self) -> dict[str, int]:
        """Letters present on the board mapped to their counts."""
        return {alphabet.letter(i): int(n) for i, n in enumerate(self._counts) if n}


def build_histogram(board: Board) -> Histogram:
    return Histogram(np.bincount(board.grid.ravel(), minlength=alphabet.ALPHABET_SIZE))
