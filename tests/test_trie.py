import pytest

import boggle.trie as trie_mod
from boggle.board import Board
from boggle.histogram import build_histogram
from boggle.solver import Solver
from boggle.trie import Trie, TrieBuildError, build_trie


def _histogram(rows):
    return build_histogram(Board(rows))


def test_insert_and_contains():
    trie = Trie(_histogram(["ab", "cd"]))
    assert trie.insert("ab")
    assert trie.insert("ABC")
    assert trie.contains("ab")
    assert trie.contains("abc")
    assert not trie.contains("a")  # prefix only
    assert not trie.contains("abcd")


def test_root_never_a_word():
    trie = Trie(_histogram(["ab", "cd"]))
    assert not trie.insert("")
    assert not trie.root.is_word
    assert not trie.contains("")


def test_rejected_word_allocates_nothing():
    trie = Trie(_histogram(["zo", "oa"]))
    assert trie.insert("zoo")
    before = trie.alloc_count
    assert not trie.insert("zoom")
    assert not trie.insert("mzoo")
    assert trie.alloc_count == before


def test_non_letter_word_rejected():
    trie = Trie(_histogram(["ab", "cd"]))
    assert not trie.insert("a-b")
    assert trie.alloc_count == 1


def test_shared_prefix_reuses_nodes():
    trie = Trie(_histogram(["ed", "ge"]))
    trie.insert("edge")
    nodes = trie.alloc_count
    trie.insert("ed")
    assert trie.alloc_count == nodes
    assert trie.contains("ed") and trie.contains("edge")


def test_child_lookup():
    trie = Trie(_histogram(["ab", "cd"]))
    trie.insert("ad")
    a = Trie.child_at(trie.root, 0)
    assert a is not None and a.letter == "a"
    assert not Trie.is_word_end(a)
    d = Trie.child_at(a, 3)
    assert Trie.is_word_end(d)
    assert Trie.child_at(a, 1) is None


def test_build_round_trip():
    words = ["cat", "cats", "bone", "dig", "zebra", "quiz", "x"]
    trie = build_trie(words, 16, _histogram(["cats", "repo", "bone", "digs"]))
    assert trie.accepted_count == 4
    assert trie.rejected_count == 3
    for w in ("cat", "cats", "bone", "dig"):
        assert trie.contains(w)
    for w in ("zebra", "quiz", "x"):
        assert not trie.contains(w)


def test_build_rejects_words_longer_than_board():
    # Letters are all on the board but the word needs more cells than exist
    trie = build_trie(["abcda", "abcd"], 4, _histogram(["ab", "cd"]))
    assert trie.accepted_count == 1
    assert not trie.contains("abcda")


def test_build_without_board_letter_is_rejected():
    hist = _histogram(["ob", "ot"])
    trie = build_trie(["boot"], 4, hist)
    nodes = trie.alloc_count
    trie2 = build_trie(["boot", "zoo"], 4, hist)
    assert trie2.accepted_count == 1
    assert trie2.alloc_count == nodes


def test_teardown_balances_allocations():
    trie = build_trie(["ab", "abc", "ad", "ca", "dcba"], 4, _histogram(["ab", "cd"]))
    assert trie.alloc_count > 1
    trie.teardown()
    assert trie.root is None
    assert trie.alloc_count == trie.free_count


def test_teardown_empty_dictionary():
    trie = build_trie([], 4, _histogram(["ab", "cd"]))
    assert trie.accepted_count == 0
    trie.teardown()
    assert trie.alloc_count == trie.free_count == 1


def test_teardown_is_idempotent():
    trie = build_trie(["ab"], 4, _histogram(["ab", "cd"]))
    trie.teardown()
    frees = trie.free_count
    trie.teardown()
    assert trie.free_count == frees


def test_context_manager_tears_down():
    with build_trie(["ab", "cd"], 4, _histogram(["ab", "cd"])) as trie:
        assert trie.contains("cd")
    assert trie.root is None
    assert trie.alloc_count == trie.free_count


def test_insert_after_teardown_fails():
    trie = Trie(_histogram(["ab", "cd"]))
    trie.teardown()
    with pytest.raises(TrieBuildError):
        trie.insert("ab")


def _flaky_node_factory(monkeypatch, succeed: int):
    real = trie_mod.TrieNode
    calls = {"n": 0}

    def factory(letter=""):
        calls["n"] += 1
        if calls["n"] > succeed:
            raise MemoryError
        return real(letter)

    monkeypatch.setattr(trie_mod, "TrieNode", factory)


def test_allocation_failure_is_distinct_from_rejection(monkeypatch):
    board = Board(["ab", "cd"])
    _flaky_node_factory(monkeypatch, succeed=3)
    trie = Trie(build_histogram(board))

    assert not trie.insert("zz")
    with pytest.raises(TrieBuildError):
        trie.insert("abcd")
    assert not trie.complete

    with pytest.raises(TrieBuildError):
        Solver(board, trie)

    trie.teardown()
    assert trie.alloc_count == trie.free_count == 3


def test_build_aborts_on_allocation_failure(monkeypatch):
    _flaky_node_factory(monkeypatch, succeed=2)
    with pytest.raises(TrieBuildError):
        build_trie(["ab", "cd"], 4, _histogram(["ab", "cd"]))


def test_build_tears_down_when_word_source_fails(caplog):
    def words():
        yield "ab"
        yield "abc"
        raise OSError("disk gone")

    with caplog.at_level("INFO", logger="boggle"):
        with pytest.raises(OSError):
            build_trie(words(), 4, _histogram(["ab", "cd"]))

    # root, a, b, c: all released before the error escaped
    assert "num alloc calls = 4, num free calls = 4" in caplog.text
    assert "Filtered dictionary" not in caplog.text
