from .squeezer import Cluster, similarity, squeezer
from .trie import AugmentedTrie, BranchNode, LeafNode

__all__ = ["AugmentedTrie", "BranchNode", "Cluster", "LeafNode", "similarity", "squeezer"]
