"""Unit tests for the prefix trie and its greedy scan."""

from piecetok import Trie


def test_push_is_idempotent():
    """Pushing the same sequence twice counts once."""
    trie = Trie()
    trie.push("abc")
    trie.push("abc")
    trie.push("ab")
    assert len(trie) == 2
    assert "abc" in trie
    assert "ab" in trie
    assert "a" not in trie


def test_matches_greedy_spans():
    """Each span is the longest entry starting at the cursor."""
    trie = Trie(["ab", "abc", "d"])
    assert list(trie.matches("abcd")) == [(0, 3), (3, 4)]
    assert list(trie.matches("abd")) == [(0, 2), (2, 3)]


def test_match_ends_at_last_complete_node():
    """Walking past the last entry falls back to that entry."""
    trie = Trie(["ab", "abcd"])
    # the walk reaches "abc" before dying; "ab" is the last complete prefix
    assert list(trie.matches("abcx")) == [(0, 2)]


def test_scan_stops_at_first_unmatched_cursor():
    """No spans are produced after a position where nothing matches."""
    trie = Trie(["a", "c"])
    assert list(trie.matches("abc")) == [(0, 1)]
    assert list(trie.matches("xa")) == []


def test_empty_inputs():
    """Empty input or an empty entry never yields zero-length spans."""
    trie = Trie([""])
    assert len(trie) == 1
    assert "" in trie
    assert list(trie.matches("")) == []
    assert list(trie.matches("a")) == []


def test_scan_is_lazy_and_independent():
    """Scans over the same trie do not share state."""
    trie = Trie(["a", "b"])
    first = trie.matches("ab")
    second = trie.matches("ba")
    assert next(first) == (0, 1)
    assert next(second) == (0, 1)
    assert list(first) == [(1, 2)]
    assert list(second) == [(1, 2)]


def test_works_on_character_lists():
    """Sequences may be lists of characters as well as strings."""
    trie = Trie([["▁", "b", "a"], ["n", "a"]])
    assert list(trie.matches(["▁", "b", "a", "n", "a"])) == [(0, 3), (3, 5)]
