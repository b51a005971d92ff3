"""Squeezer: single-pass incremental clustering of SAX words."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from ..errors import InvalidParameterError

logger = logging.getLogger(__name__)

Cluster = list[int]


def similarity(word: str, counts: Counter[str]) -> float:
    """Support ratio of ``word`` inside a cluster.

    ``counts`` maps each distinct word of the cluster to its number of
    members, so the denominator (the summed support of all distinct words)
    equals the cluster size.
    """

    total = sum(counts.values())
    if total == 0:
        return 0.0
    return counts.get(word, 0) / total


def squeezer(words: Sequence[str], threshold: float) -> list[Cluster]:
    """Cluster window indices by the similarity of their words.

    Indices are visited in order. Each one joins the earliest-created cluster
    with the highest similarity when that similarity reaches ``threshold``,
    otherwise it seeds a new cluster. The result partitions
    ``range(len(words))`` and depends on the visiting order.
    """

    threshold = float(threshold)
    if not 0.0 < threshold <= 1.0:
        raise InvalidParameterError(f"cluster threshold must be in (0, 1] (got {threshold})")
    if not words:
        return []

    clusters: list[Cluster] = [[0]]
    supports: list[Counter[str]] = [Counter([words[0]])]

    for index in range(1, len(words)):
        word = words[index]
        best_score = 0.0
        best_cluster = 0
        for cluster_id, counts in enumerate(supports):
            score = similarity(word, counts)
            if score > best_score:
                best_score = score
                best_cluster = cluster_id

        if best_score >= threshold:
            clusters[best_cluster].append(index)
            supports[best_cluster][word] += 1
        else:
            clusters.append([index])
            supports.append(Counter([word]))

    logger.debug("squeezer formed %s clusters from %s words", len(clusters), len(words))
    return clusters
