from __future__ import annotations

import math

import numpy as np
import pytest

from discords import (
    BruteForceSearch,
    ClusterSearch,
    HeuristicSearch,
    InvalidAlphabetError,
    InvalidParameterError,
    SearchCancelledError,
    gaussian_distance,
)

WINDOW = 16


def _nearest_neighbour(data: np.ndarray, index: int, window: int) -> float:
    best = math.inf
    for j in range(data.size - window + 1):
        if abs(index - j) >= window:
            best = min(best, gaussian_distance(data[index : index + window], data[j : j + window]))
    return best


def test_brute_force_matches_definition(anomalous_series: np.ndarray) -> None:
    data = anomalous_series[:80]
    distance, location = BruteForceSearch().find_best(data, WINDOW)

    profile = [_nearest_neighbour(data, i, WINDOW) for i in range(data.size - WINDOW + 1)]
    assert location == int(np.argmax(profile))
    assert distance == pytest.approx(max(profile))


def test_brute_force_concrete_spike(ramp_with_spike: list[float]) -> None:
    distance, location = BruteForceSearch().find_best(ramp_with_spike, 20)
    assert location is not None
    assert abs(location - 180) < 20
    assert distance > math.sqrt(20 * 20**2)


def test_brute_force_respects_skip_set(anomalous_series: np.ndarray) -> None:
    strategy = BruteForceSearch()
    _, location = strategy.find_best(anomalous_series, WINDOW)
    _, other = strategy.find_best(anomalous_series, WINDOW, skip={location})
    assert other != location


def test_everything_skipped_means_no_discord(anomalous_series: np.ndarray) -> None:
    data = anomalous_series[:60]
    skip = set(range(data.size))
    for strategy in (BruteForceSearch(), HeuristicSearch(), ClusterSearch()):
        assert strategy.find_best(data, WINDOW, skip, rng=np.random.default_rng(0)) == (0.0, None)


def test_window_without_comparable_neighbour_is_not_reported() -> None:
    data = np.sin(np.arange(10, dtype=float))
    assert BruteForceSearch().find_best(data, 6) == (0.0, None)


@pytest.mark.parametrize(
    "strategy",
    [
        HeuristicSearch(word_length=4, alpha=3),
        HeuristicSearch(word_length=8, alpha=5),
        ClusterSearch(word_length=4, alpha=4, threshold=0.5),
        ClusterSearch(word_length=3, alpha=3, threshold=1.0),
    ],
)
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_faster_strategies_agree_with_brute_force(anomalous_series: np.ndarray, strategy, seed: int) -> None:
    expected_dist, expected_loc = BruteForceSearch().find_best(anomalous_series, WINDOW)

    distance, location = strategy.find_best(anomalous_series, WINDOW, rng=np.random.default_rng(seed))

    assert location == expected_loc
    assert distance == pytest.approx(expected_dist)


def test_heuristic_is_deterministic_for_a_seed(anomalous_series: np.ndarray) -> None:
    strategy = HeuristicSearch(word_length=4)
    first = strategy.prepare(anomalous_series, WINDOW, np.random.default_rng(42))
    second = strategy.prepare(anomalous_series, WINDOW, np.random.default_rng(42))
    assert first.order == second.order


def test_heuristic_orders_rare_words_first(anomalous_series: np.ndarray) -> None:
    context = HeuristicSearch(word_length=4).prepare(anomalous_series, WINDOW, np.random.default_rng(3))
    table = {entry.index: entry.frequency for entry in context.extras["word_table"]}
    frequencies = [table[i] for i in context.order]
    assert frequencies == sorted(frequencies)
    assert sorted(context.order) == list(range(context.n_windows))


def test_cluster_order_starts_with_smallest_cluster(anomalous_series: np.ndarray) -> None:
    context = ClusterSearch(word_length=4).prepare(anomalous_series, WINDOW, np.random.default_rng(3))
    clusters = context.extras["clusters"]
    smallest = min(clusters, key=len)
    assert context.order[: len(smallest)] == smallest
    assert sorted(context.order) == list(range(context.n_windows))


def test_word_length_longer_than_window_is_rejected(anomalous_series: np.ndarray) -> None:
    with pytest.raises(InvalidParameterError):
        HeuristicSearch(word_length=WINDOW + 1).find_best(anomalous_series, WINDOW)
    with pytest.raises(InvalidParameterError):
        ClusterSearch(word_length=WINDOW + 1).find_best(anomalous_series, WINDOW)


def test_invalid_strategy_parameters() -> None:
    with pytest.raises(InvalidAlphabetError):
        HeuristicSearch(alpha=9)
    with pytest.raises(InvalidParameterError):
        ClusterSearch(threshold=0.0)
    with pytest.raises(InvalidParameterError):
        HeuristicSearch(word_length=0)


@pytest.mark.parametrize(
    "data, window",
    [([], 3), ([1.0, float("nan"), 2.0], 1), ([1.0, 2.0], 3), ([1.0, 2.0], 0)],
)
def test_input_contract_is_checked_eagerly(data: list[float], window: int) -> None:
    with pytest.raises(InvalidParameterError):
        BruteForceSearch().find_best(data, window)


def test_cancellation_hook_stops_search(anomalous_series: np.ndarray) -> None:
    calls = {"n": 0}

    def should_cancel() -> bool:
        calls["n"] += 1
        return calls["n"] > 5

    for strategy in (BruteForceSearch(), HeuristicSearch(), ClusterSearch()):
        calls["n"] = 0
        context = strategy.prepare(anomalous_series, WINDOW, np.random.default_rng(0), should_cancel=should_cancel)
        with pytest.raises(SearchCancelledError):
            strategy.search(context, set(), np.random.default_rng(0))


def test_describe_reports_parameters() -> None:
    assert ClusterSearch(word_length=5, alpha=4, threshold=0.8).describe() == {
        "name": "cluster",
        "word_length": 5,
        "alpha": 4,
        "threshold": 0.8,
    }


@pytest.mark.parametrize("strategy_cls", [HeuristicSearch, ClusterSearch])
@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_tied_discords_resolve_to_earliest_window(strategy_cls, seed: int) -> None:
    data = [float(v) for v in range(1, 200)]
    data[100] = 300.0
    expected_dist, expected_loc = BruteForceSearch().find_best(data, 20)

    distance, location = strategy_cls().find_best(data, 20, rng=np.random.default_rng(seed))

    assert location == expected_loc
    assert distance == pytest.approx(expected_dist)


def test_multivariate_input_is_rejected() -> None:
    with pytest.raises(InvalidParameterError):
        BruteForceSearch().find_best(np.ones((2, 20)) * np.arange(20), 4)


def test_find_best_accepts_cancellation_hook(anomalous_series: np.ndarray) -> None:
    with pytest.raises(SearchCancelledError):
        HeuristicSearch().find_best(anomalous_series, WINDOW, should_cancel=lambda: True)
