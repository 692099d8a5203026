from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

from boggle import alphabet


class BoardError(ValueError):
    """Raised when board rows do not describe a square grid of letters."""


class Board:
    """Square N x N grid of lowercase letters. Read-only once built."""

    __slots__ = ("size", "_letters", "_indices", "_grid")

    def __init__(self, rows: Iterable[str]):
        rows = [row.lower() for row in rows]
        if not rows:
            raise BoardError("Board has no rows")

        size = len(rows[0])
        if size == 0:
            raise BoardError("Board row 0 is empty")
        if len(rows) != size:
            raise BoardError(f"Board is not square: {len(rows)} rows of length {size}")

        letters: list[str] = []
        for r, row in enumerate(rows):
            if len(row) != size:
                raise BoardError(f"Row {r} has length {len(row)}, expected {size}")
            for c, ch in enumerate(row):
                if not alphabet.is_letter(ch):
                    raise BoardError(f"Invalid character {ch!r} at ({r},{c})")
                letters.append(ch)

        self.size = size
        # Flat row-major copies for the search loop; numpy grid for bulk work
        self._letters = tuple(letters)
        self._indices = tuple(alphabet.index(ch) for ch in letters)
        grid = np.array(self._indices, dtype=np.uint8).reshape(size, size)
        grid.flags.writeable = False
        self._grid = grid

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    @property
    def grid(self) -> np.ndarray:
        """Read-only N x N array of alphabet indices."""
        return self._grid

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def flat_index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row},{col}) outside {self.size}x{self.size} board")
        return row * self.size + col

    def at(self, row: int, col: int) -> str:
        return self._letters[self.flat_index(row, col)]

    def index_at(self, row: int, col: int) -> int:
        return self._indices[self.flat_index(row, col)]

    def neighbors(self, row: int, col: int) -> Iterator[tuple[int, int]]:
        """Yield adjacent cells, row-major over the 3x3 block, skipping the centre."""
        for dr in (-1, 0, 1):
            nr = row + dr
            if not 0 <= nr < self.size:
                continue
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nc = col + dc
                if 0 <= nc < self.size:
                    yield nr, nc

    def cells(self) -> Iterator[tuple[int, int]]:
        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    def rows(self) -> list[str]:
        n = self.size
        return ["".join(self._letters[r * n:(r + 1) * n]) for r in range(n)]

    def __repr__(self) -> str:
        return f"Board({self.rows()!r})"
