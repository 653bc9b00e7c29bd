# tests/test_metrics.py
"""
Quality measures and k selection.

Covers:
- Silhouette edge cases: point on the midpoint, coincident cluster,
  singleton, single cluster
- Silhouette from a precomputed distance table and arbitrary label ids
- Total cost / inertia
- select_n_clusters and elbow_curve on separated blobs
"""

from __future__ import annotations

import pytest
import torch

from kcenters import KMeans, PAM
from kcenters.utils.metrics import (
    pairwise_distances, silhouette_samples, silhouette_score, total_cost, inertia
)
from kcenters.utils.model_selection import select_n_clusters, elbow_curve
from kcenters.utils.validation import check_random_state


def test_silhouette_zero_on_midpoint():
    X = torch.tensor([[0.0, 0.0], [-1.0, 0.0], [1.0, 0.0]])
    s = silhouette_samples(X, torch.tensor([0, 0, 1]))
    assert s[0].item() == pytest.approx(0.0)


def test_silhouette_one_for_coincident_cluster_and_zero_for_singleton():
    X = torch.tensor([[0.0, 0.0], [0.0, 0.0], [5.0, 0.0]])
    s = silhouette_samples(X, torch.tensor([0, 0, 1]))
    assert s[0].item() == pytest.approx(1.0)
    assert s[1].item() == pytest.approx(1.0)
    assert s[2].item() == 0.0


def test_silhouette_single_cluster_is_all_zero():
    X = torch.tensor([[0.0], [1.0], [2.0]])
    assert silhouette_samples(X, torch.zeros(3, dtype=torch.long)).tolist() == [0.0, 0.0, 0.0]


def test_silhouette_matches_definition(rng):
    X = torch.tensor(rng.normal(size=(12, 2)), dtype=torch.float32)
    labels = torch.tensor([0, 1, 2] * 4)
    s = silhouette_samples(X, labels)
    D = pairwise_distances(X).double()

    i = 4  # cluster 1
    own = [j for j in range(12) if labels[j] == 1 and j != i]
    a = D[i, own].mean()
    b = min(D[i, labels == c].mean() for c in (0, 2))
    expected = (b - a) / max(a, b)
    assert s[i].item() == pytest.approx(expected.item(), abs=1e-5)
    assert torch.all(s >= -1) and torch.all(s <= 1)


def test_silhouette_with_precomputed_distances_and_any_label_ids():
    X = torch.tensor([[0.0, 0.0], [0.0, 1.0], [9.0, 0.0], [9.0, 1.0]])
    D = pairwise_distances(X, metric="manhattan")
    a = silhouette_samples(X, torch.tensor([7, 7, 42, 42]), distances=D)
    b = silhouette_samples(X, torch.tensor([0, 0, 1, 1]), metric="manhattan")
    assert torch.allclose(a, b)
    assert a[0].item() == pytest.approx(1 - 1 / 9.5)


def test_silhouette_rejects_wrong_label_count():
    with pytest.raises(ValueError):
        silhouette_samples(torch.zeros(3, 2), torch.tensor([0, 1]))


def test_silhouette_score_on_blobs(blobs):
    X, y = blobs
    assert silhouette_score(X, y) > 0.7
    sampled = silhouette_score(X, y, sample_size=50, generator=check_random_state(0))
    again = silhouette_score(X, y, sample_size=50, generator=check_random_state(0))
    assert sampled == again
    assert sampled > 0.5


def test_total_cost_and_inertia():
    X = torch.tensor([[0.0, 0.0], [3.0, 4.0]])
    centers = torch.tensor([[0.0, 0.0]])
    labels = torch.tensor([0, 0])
    assert total_cost(X, labels, centers) == pytest.approx(5.0)
    assert total_cost(X, labels, centers, squared=True) == pytest.approx(25.0)
    assert total_cost(X, labels, centers, metric="manhattan") == pytest.approx(7.0)
    assert inertia(X, labels, centers) == pytest.approx(25.0)


def test_model_cost_matches_total_cost(blobs):
    X, _ = blobs
    km = KMeans(3, random_state=0).fit(X)
    assert km.cost_ == pytest.approx(inertia(X, km.labels_, km.cluster_centers_), rel=1e-4)
    pam = PAM(3).fit(X)
    assert pam.cost_ == pytest.approx(
        total_cost(X, pam.labels_, pam.cluster_centers_), rel=1e-4)


def test_select_n_clusters_finds_three_blobs(blobs):
    X, _ = blobs
    best_k, scores = select_n_clusters(X, [2, 3, 4, 5])
    assert best_k == 3
    assert set(scores) == {2, 3, 4, 5}
    assert scores[3] == max(scores.values())


def test_select_n_clusters_with_custom_factory(blobs):
    X, _ = blobs
    best_k, _ = select_n_clusters(X, [2, 3, 4], make_model=lambda k: PAM(k))
    assert best_k == 3


def test_select_n_clusters_rejects_bad_k(blobs):
    X, _ = blobs
    with pytest.raises(ValueError):
        select_n_clusters(X, [1, 2])
    with pytest.raises(ValueError):
        select_n_clusters(X, [])


def test_elbow_curve_drops_sharply_at_true_k(blobs):
    X, _ = blobs
    ks, costs = elbow_curve(X, [1, 2, 3], make_model=lambda k: PAM(k))
    assert ks == [1, 2, 3]
    assert costs[0] > costs[1] > costs[2]
    assert costs[2] < 0.5 * costs[1]
