from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from discords import AugmentedTrie, InvalidParameterError, LookupMiscompareError, squeezer
from discords.index import BranchNode, LeafNode, similarity


def _trie() -> AugmentedTrie:
    return AugmentedTrie.from_words([(0, "abc"), (1, "abd"), (2, "abc"), (5, "cab")])


def test_trie_lookup_returns_indices_in_insertion_order() -> None:
    trie = _trie()
    assert trie.lookup("abc") == (0, 2)
    assert trie.lookup("cab") == (5,)
    assert len(trie) == 4
    assert trie.word_length == 3
    assert trie.words() == ["abc", "abd", "cab"]


def test_trie_nodes_are_branch_then_leaf() -> None:
    trie = _trie()
    first = trie.root.children["a"]
    assert isinstance(first, BranchNode)
    leaf = first.children["b"].children["c"]  # type: ignore[union-attr]
    assert isinstance(leaf, LeafNode)


@pytest.mark.parametrize("word", ["abx", "zzz", "ab", "abcd", ""])
def test_trie_lookup_miss_is_an_error(word: str) -> None:
    with pytest.raises(LookupMiscompareError):
        _trie().lookup(word)
    assert word not in _trie()


def test_trie_rejects_mixed_lengths_and_empty_words() -> None:
    trie = _trie()
    with pytest.raises(InvalidParameterError):
        trie.add_word("ab", 9)
    with pytest.raises(InvalidParameterError):
        AugmentedTrie().add_word("", 0)


def test_similarity_is_support_ratio() -> None:
    counts = Counter({"aab": 1, "bbb": 3})
    assert similarity("aab", counts) == pytest.approx(0.25)
    assert similarity("bbb", counts) == pytest.approx(0.75)
    assert similarity("ccc", counts) == 0.0


def test_squeezer_groups_by_first_matching_cluster() -> None:
    words = ["aaa", "aaa", "bbb", "aaa", "bbb", "ccc"]
    assert squeezer(words, 0.5) == [[0, 1, 3], [2, 4], [5]]


def test_squeezer_empty_input() -> None:
    assert squeezer([], 0.5) == []


@pytest.mark.parametrize("threshold", [0.0, -0.1, 1.5])
def test_squeezer_rejects_threshold(threshold: float) -> None:
    with pytest.raises(InvalidParameterError):
        squeezer(["a"], threshold)


@pytest.mark.parametrize("threshold", [0.1, 0.5, 1.0])
def test_squeezer_partitions_all_indices(threshold: float) -> None:
    rng = np.random.default_rng(11)
    words = ["".join(rng.choice(list("abc"), size=3)) for _ in range(150)]

    clusters = squeezer(words, threshold)

    flat = [i for cluster in clusters for i in cluster]
    assert sorted(flat) == list(range(len(words)))
    assert len(flat) == len(set(flat))
