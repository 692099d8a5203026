from __future__ import annotations

from collections.abc import Iterator
from typing import NamedTuple

from boggle.board import Board
from boggle.trie import Trie, TrieBuildError, TrieNode


class Finding(NamedTuple):
    word: str
    row: int
    col: int
    path: tuple[tuple[int, int], ...] = ()


class Solver:
    """Depth-first search of a board, walking the trie in lockstep.

    The solver owns the only mutable search state: one visited flag per cell
    and a buffer holding the letters of the word being spelled. Both are back
    to all-clear whenever ``solve`` is not mid-iteration.
    """

    def __init__(self, board: Board, trie: Trie):
        if trie.root is None:
            raise TrieBuildError("Trie has been torn down")
        if not trie.complete:
            raise TrieBuildError("Refusing to search an incompletely built trie")
        self.board = board
        self.trie = trie
        total = board.cell_count
        self.visited: list[bool] = [False] * total
        self.buffer: list[str] = [""] * total
        self._path: list[tuple[int, int]] = []
        self._origin = (0, 0)

    def _mark(self, row: int, col: int, depth: int):
        idx = self.board.flat_index(row, col)
        assert not self.visited[idx]
        self.visited[idx] = True
        self.buffer[depth] = self.board.at(row, col)
        self._path.append((row, col))

    def _unmark(self, row: int, col: int, depth: int):
        idx = self.board.flat_index(row, col)
        assert self.visited[idx]
        self.visited[idx] = False
        self.buffer[depth] = ""
        self._path.pop()

    def solve(self) -> Iterator[Finding]:
        """Yield every (word, origin) finding, row-major over starting cells."""
        root = self.trie.root
        if root is None:
            raise TrieBuildError("Trie has been torn down")

        for r, c in self.board.cells():
            child = Trie.child_at(root, self.board.index_at(r, c))
            if child is None:
                continue
            self._origin = (r, c)
            self._mark(r, c, 0)
            try:
                yield from self._explore(r, c, child, 1)
            finally:
                self._unmark(r, c, 0)

    def _explore(self, row: int, col: int, node: TrieNode, depth: int) -> Iterator[Finding]:
        assert node is not None

        # No early return: a word may be the prefix of a longer one
        if Trie.is_word_end(node):
            word = "".join(self.buffer[:depth])
            yield Finding(word, self._origin[0], self._origin[1], tuple(self._path))

        for nr, nc in self.board.neighbors(row, col):
            if self.visited[self.board.flat_index(nr, nc)]:
                continue
            child = Trie.child_at(node, self.board.index_at(nr, nc))
            if child is None:
                continue
            self._mark(nr, nc, depth)
            try:
                yield from self._explore(nr, nc, child, depth + 1)
            finally:
                self._unmark(nr, nc, depth)

    def is_clear(self) -> bool:
        """True when no cell is marked and the word buffer is empty."""
        return not any(self.visited) and not any(self.buffer) and not self._path


def solve(board: Board, trie: Trie) -> Iterator[Finding]:
    return Solver(board, trie).solve()
