from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from boggle.board import Board

logger = logging.getLogger("boggle")


def chop(line: str) -> str:
    """Strip trailing non-letter characters (line terminators, spaces)."""
    end = len(line)
    while end and not line[end - 1].isalpha():
        end -= 1
    return line[:end]


def read_board(path: str | Path) -> Board:
    """Read a board file, one row per line. Blank lines are skipped."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        rows = [row for row in (chop(line) for line in f) if row]
    board = Board(rows)
    logger.info("Loaded %dx%d board from %s", board.size, board.size, path)
    return board


def read_words(path: str | Path) -> Iterator[str]:
    """Lazily yield dictionary words, one per line."""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            word = chop(line)
            if word:
                yield word


def load_words(path: str | Path) -> list[str]:
    words = list(read_words(path))
    logger.info("Read %d dictionary words from %s", len(words), path)
    return words
