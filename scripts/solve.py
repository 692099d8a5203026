"""
Command-line word finder.

Usage:
    python -m scripts.solve <board_file> <dictionary_file> [--max-results N]

The board file holds one row of letters per line (square, any size). The
dictionary file holds one word per line. Prints the board, the number of
dictionary words that survive filtering, every word found with the cell it
starts on, and the trie allocation / release counts.
"""
import argparse
import logging
import sys
from itertools import islice
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle.board import Board, BoardError
from boggle.histogram import build_histogram
from boggle.loader import read_board, read_words
from boggle.metrics import StageTimer
from boggle.solver import solve
from boggle.trie import TrieBuildError, build_trie

logger = logging.getLogger("boggle")


def render_board(board: Board) -> str:
    return "\n".join("".join(f"{ch:>2}" for ch in row) for row in board.rows())


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Find every dictionary word on a Boggle board")
    parser.add_argument("board_file", help="Board file, one row per line")
    parser.add_argument("dictionary_file", help="Dictionary file, one word per line")
    parser.add_argument("--max-results", type=int, default=0,
                        help="Stop after this many findings (default: 0, no limit)")
    parser.add_argument("--verbose", action="store_true", help="Log stage timings")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    timer = StageTimer()

    try:
        with timer.stage("board"):
            board = read_board(args.board_file)
    except OSError as e:
        print(f'Error opening board file "{args.board_file}": {e.strerror}')
        return 1
    except BoardError as e:
        print(f"Invalid board: {e}")
        return 1

    print(f"Allocating enough memory for a {board.size} x {board.size} board")
    print(render_board(board))

    with timer.stage("histogram"):
        histogram = build_histogram(board)
    logger.info("Board histogram: %s", histogram.as_dict())

    try:
        with timer.stage("trie"):
            trie = build_trie(read_words(args.dictionary_file), board.cell_count, histogram)
    except OSError as e:
        print(f'Error opening dictionary file "{args.dictionary_file}": {e.strerror}')
        return 1
    except TrieBuildError as e:
        print(f"Error building trie: {e}")
        return 1

    print(f"Filtered dictionary down to {trie.accepted_count} words")
    timer.record_trie(trie)

    limit = args.max_results if args.max_results > 0 else None
    found = 0
    with trie, timer.stage("solve"):
        for finding in islice(solve(board, trie), limit):
            print(f"Found word {finding.word} ({finding.row},{finding.col})")
            found += 1
    timer.record_findings(found)

    print(f"num alloc calls = {trie.alloc_count}, num free calls = {trie.free_count}")
    logger.info("Solve summary: %s", timer.report())
    return 0


if __name__ == "__main__":
    sys.exit(main())
