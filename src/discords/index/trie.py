"""Fixed-depth prefix trie mapping SAX words to the windows that produced them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from ..errors import InvalidParameterError, LookupMiscompareError


@dataclass
class LeafNode:
    """Terminal node: the window start indices of one complete word."""

    indices: list[int] = field(default_factory=list)


@dataclass
class BranchNode:
    """Internal node keyed by the next letter of the word."""

    children: dict[str, "TrieNode"] = field(default_factory=dict)


TrieNode = Union[BranchNode, LeafNode]


class AugmentedTrie:
    """Trie over equal-length words whose leaves hold occurrence indices.

    Every word inserted must have the same length as the first one. Looking
    up a word that was never inserted is an error rather than an empty
    result, since callers only ever query words they inserted themselves.
    """

    def __init__(self) -> None:
        self.root = BranchNode()
        self.word_length: int | None = None
        self._size = 0

    @classmethod
    def from_words(cls, words: Iterable[tuple[int, str]]) -> "AugmentedTrie":
        trie = cls()
        for index, word in words:
            trie.add_word(word, index)
        return trie

    def add_word(self, word: str, index: int) -> None:
        if not word:
            raise InvalidParameterError("an empty word cannot be added to the trie")
        if self.word_length is None:
            self.word_length = len(word)
        elif len(word) != self.word_length:
            raise InvalidParameterError(
                f"all words must have length {self.word_length} (got {word!r})"
            )

        node = self.root
        for letter in word[:-1]:
            child = node.children.get(letter)
            if child is None:
                child = node.children[letter] = BranchNode()
            node = child  # type: ignore[assignment]

        leaf = node.children.get(word[-1])
        if leaf is None:
            leaf = node.children[word[-1]] = LeafNode()
        leaf.indices.append(int(index))  # type: ignore[union-attr]
        self._size += 1

    def lookup(self, word: str) -> tuple[int, ...]:
        """Return the indices of ``word`` in insertion order."""

        if not word or len(word) != self.word_length:
            raise LookupMiscompareError(
                f"word {word!r} does not match the trie word length {self.word_length}"
            )

        node: TrieNode = self.root
        for letter in word:
            if not isinstance(node, BranchNode) or letter not in node.children:
                raise LookupMiscompareError(f"word {word!r} does not exist in the trie")
            node = node.children[letter]

        if not isinstance(node, LeafNode):
            raise LookupMiscompareError(f"word {word!r} ended on an internal node")
        return tuple(node.indices)

    def words(self) -> list[str]:
        found: list[str] = []

        def walk(node: TrieNode, prefix: str) -> None:
            if isinstance(node, LeafNode):
                found.append(prefix)
                return
            for letter in sorted(node.children):
                walk(node.children[letter], prefix + letter)

        if self._size:
            walk(self.root, "")
        return found

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        try:
            self.lookup(word)
        except LookupMiscompareError:
            return False
        return True

    def __len__(self) -> int:
        return self._size
