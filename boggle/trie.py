from __future__ import annotations

import logging
from collections.abc import Iterable

from boggle import alphabet
from boggle.histogram import Histogram

logger = logging.getLogger("boggle")


class TrieBuildError(RuntimeError):
    """The trie could not be built (node allocation failed) or is unusable."""


class TrieNode:
    __slots__ = ("letter", "children", "is_word")

    def __init__(self, letter: str = ""):
        self.letter = letter  # diagnostics only, traversal is by index
        self.children: list[TrieNode | None] = [None] * alphabet.ALPHABET_SIZE
        self.is_word: bool = False


class Trie:
    """26-ary prefix tree of the dictionary words that the board could spell.

    Insertion is filtered through the board histogram: a word using a letter
    the board lacks is rejected before any node is allocated for it. Node
    creation and release are counted so that teardown can be checked for
    balance (``alloc_count == free_count``).
    """

    def __init__(self, histogram: Histogram):
        self.histogram = histogram
        self.alloc_count = 0
        self.free_count = 0
        self.complete = True
        self.accepted_count = 0
        self.rejected_count = 0
        self.root: TrieNode | None = self._new_node("")

    def _new_node(self, letter: str) -> TrieNode:
        node = TrieNode(letter)
        self.alloc_count += 1
        return node

    def insert(self, word: str) -> bool:
        """Add ``word`` if every letter occurs on the board; return whether it was added."""
        if self.root is None:
            raise TrieBuildError("Cannot insert into a torn-down trie")

        word = word.lower()
        if not word:
            return False

        indices = []
        for ch in word:
            if not alphabet.is_letter(ch):
                return False
            ix = alphabet.index(ch)
            if not self.histogram.has(ix):
                return False
            indices.append(ix)

        node = self.root
        for ch, ix in zip(word, indices):
            child = node.children[ix]
            if child is None:
                try:
                    child = self._new_node(ch)
                except MemoryError as e:
                    self.complete = False
                    raise TrieBuildError(f"Out of memory inserting {word!r}") from e
                node.children[ix] = child
            node = child

        assert node is not self.root
        node.is_word = True
        return True

    @staticmethod
    def child_at(node: TrieNode, idx: int) -> TrieNode | None:
        return node.children[idx]

    @staticmethod
    def is_word_end(node: TrieNode) -> bool:
        return node.is_word

    def find(self, prefix: str) -> TrieNode | None:
        """Walk ``prefix`` from the root; None if any letter has no child."""
        node = self.root
        for ch in prefix.lower():
            if node is None or not alphabet.is_letter(ch):
                return None
            node = node.children[alphabet.index(ch)]
        return node

    def contains(self, word: str) -> bool:
        node = self.find(word)
        return node is not None and node is not self.root and node.is_word

    def _free(self, node: TrieNode):
        for i, child in enumerate(node.children):
            if child is not None:
                self._free(child)
                node.children[i] = None
        self.free_count += 1

    def teardown(self):
        """Release every node, root included. Safe to call more than once."""
        if self.root is None:
            return
        self._free(self.root)
        self.root = None
        logger.info("num alloc calls = %d, num free calls = %d", self.alloc_count, self.free_count)
        assert self.alloc_count == self.free_count

    def __enter__(self) -> Trie:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.teardown()


def build_trie(words: Iterable[str], max_word_length: int, histogram: Histogram) -> Trie:
    """Build a trie from ``words``, dropping any the board cannot possibly spell.

    Words longer than ``max_word_length`` (the board's cell count) are skipped
    outright. The rest go through :meth:`Trie.insert`, which rejects words
    containing a letter absent from the board. Raises ``TrieBuildError`` if node
    allocation fails. If anything interrupts the build, including the word
    source itself, the partial trie is torn down before the error propagates.
    """
    trie = Trie(histogram)
    try:
        for word in words:
            if len(word) > max_word_length:
                trie.rejected_count += 1
            elif trie.insert(word):
                trie.accepted_count += 1
            else:
                trie.rejected_count += 1
    except BaseException:
        trie.teardown()
        raise

    logger.info("Filtered dictionary down to %d words", trie.accepted_count)
    return trie
