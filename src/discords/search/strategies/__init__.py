from .brute_force import BruteForceSearch
from .cluster import ClusterSearch
from .heuristic import HeuristicSearch

__all__ = ["BruteForceSearch", "ClusterSearch", "HeuristicSearch"]
