"""
Character prefix trie with a greedy longest-match-first scan.

The scan walks the trie from a cursor as far as the input allows, keeps the
deepest node marked as a complete entry, emits that span and restarts from
its end. It stops at the first cursor where no entry starts.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field


@dataclass(slots=True)
class _Node:
    children: dict[str, "_Node"] = field(default_factory=dict)
    is_leaf: bool = False


class Trie:
    """
    Prefix tree over single characters.

    Example:
       >>> trie = Trie(["ab", "abc", "d"])
       >>> list(trie.matches("abcd"))
       [(0, 3), (3, 4)]
    """

    def __init__(self, sequences: Iterable[Sequence[str]] = ()) -> None:
        self._root = _Node()
        self._size = 0
        for seq in sequences:
            self.push(seq)

    def push(self, sequence: Sequence[str]) -> None:
        """Insert ``sequence`` and mark its last node as a complete entry."""
        node = self._root
        for label in sequence:
            node = node.children.setdefault(label, _Node())
        if not node.is_leaf:
            node.is_leaf = True
            self._size += 1

    def matches(self, sequence: Sequence[str]) -> Iterator[tuple[int, int]]:
        """
        Lazily yield contiguous ``(start, stop)`` spans of greedy matches.

        Each span is the longest complete entry starting at the current
        cursor. Iteration ends at the end of ``sequence`` or at the first
        cursor where no entry starts; callers detect the latter by checking
        that the spans cover the whole input.
        """
        n = len(sequence)
        cursor = 0
        while cursor < n:
            node = self._root
            end = None
            pos = cursor
            while pos < n:
                child = node.children.get(sequence[pos])
                if child is None:
                    break
                node = child
                pos += 1
                if node.is_leaf:
                    end = pos
            if end is None:
                return
            yield cursor, end
            cursor = end

    def __contains__(self, sequence: object) -> bool:
        if not isinstance(sequence, (str, list, tuple)):
            return False
        node = self._root
        for label in sequence:
            node = node.children.get(label)
            if node is None:
                return False
        return node.is_leaf

    def __len__(self) -> int:
        return self._size


__all__ = ["Trie"]
