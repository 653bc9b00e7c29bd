"""
Clustering quality metrics.

Internal metrics computed from the points and an assignment alone: the
silhouette coefficient and the within-cluster cost.
"""

from typing import Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric
from ..distances import get_distance, DistanceMatrix


def pairwise_distances(X: Tensor, Y: Optional[Tensor] = None,
                       metric: Union[str, DistanceMetric] = 'euclidean') -> Tensor:
    """Compute pairwise distances between points.

    Args:
        X: (n, d) first set of points
        Y: (m, d) second set of points (if None, uses X)
        metric: Metric name or instance

    Returns:
        (n, m) distance matrix
    """
    matrix = DistanceMatrix(get_distance(metric), cache=False)
    if Y is None:
        return matrix.pairwise(X)
    return matrix.compute(X, Y)


def silhouette_samples(X: Tensor, labels: Tensor,
                       metric: Union[str, DistanceMetric] = 'euclidean',
                       distances: Optional[Tensor] = None) -> Tensor:
    """Silhouette coefficient of every point.

    For point i in cluster C, a(i) is the mean distance to the other members
    of C and b(i) the smallest mean distance to the members of another
    non-empty cluster. s(i) = (b - a) / max(a, b).

    Defined cases rather than errors:
    - a point alone in its cluster scores 0
    - a point with no other cluster to compare against scores 0
    - s(i) = 0 when max(a, b) == 0

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels (any integer ids)
        metric: Distance metric
        distances: Optional precomputed (n, n) distance matrix

    Returns:
        (n,) tensor of scores in [-1, 1]
    """
    labels = torch.as_tensor(labels, device=X.device).long()
    n_samples = X.shape[0]
    if labels.shape != (n_samples,):
        raise ValueError(f"Expected {n_samples} labels, got shape {tuple(labels.shape)}")

    if distances is None:
        distances = pairwise_distances(X, metric=metric)
    distances = distances.to(torch.float64)

    cluster_ids, inverse = torch.unique(labels, return_inverse=True)
    n_clusters = len(cluster_ids)
    if n_clusters < 2:
        return torch.zeros(n_samples, dtype=X.dtype, device=X.device)

    # (n, C) membership one-hot; sums[i, c] = total distance from i to cluster c
    membership = torch.zeros(n_samples, n_clusters, dtype=torch.float64, device=X.device)
    membership[torch.arange(n_samples, device=X.device), inverse] = 1.0
    counts = membership.sum(dim=0)
    sums = distances @ membership

    own_counts = counts[inverse]
    own_sums = sums[torch.arange(n_samples, device=X.device), inverse]
    a = torch.where(own_counts > 1, own_sums / (own_counts - 1).clamp(min=1), torch.zeros_like(own_sums))

    mean_to_cluster = sums / counts.unsqueeze(0)
    mean_to_cluster[torch.arange(n_samples, device=X.device), inverse] = float('inf')
    b = mean_to_cluster.min(dim=1).values

    denom = torch.maximum(a, b)
    scores = torch.where(denom > 0, (b - a) / torch.where(denom > 0, denom, torch.ones_like(denom)),
                         torch.zeros_like(denom))
    scores = torch.where(own_counts > 1, scores, torch.zeros_like(scores))
    return scores.to(X.dtype)


def silhouette_score(X: Tensor, labels: Tensor,
                     metric: Union[str, DistanceMetric] = 'euclidean',
                     sample_size: Optional[int] = None,
                     generator: Optional[torch.Generator] = None) -> float:
    """Mean silhouette coefficient over all (or a random subset of) points.

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        metric: Distance metric
        sample_size: If provided, subsample for efficiency
        generator: Random source for the subsample

    Returns:
        Mean silhouette coefficient in [-1, 1]
    """
    labels = torch.as_tensor(labels, device=X.device).long()
    n_samples = len(X)

    if sample_size is not None and sample_size < n_samples:
        indices = torch.randperm(n_samples, generator=generator)[:sample_size].to(X.device)
        X = X[indices]
        labels = labels[indices]

    return silhouette_samples(X, labels, metric=metric).mean().item()


def total_cost(X: Tensor, labels: Tensor, centers: Tensor,
               metric: Union[str, DistanceMetric] = 'euclidean',
               squared: bool = False) -> float:
    """Sum over points of the distance to their assigned center.

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels indexing rows of ``centers``
        centers: (k, d) cluster centers
        metric: Distance metric
        squared: Sum squared distances instead (WCSS)

    Returns:
        Total cost (lower is better)
    """
    labels = torch.as_tensor(labels, device=X.device).long()
    distance = get_distance(metric)
    distances = distance.compute(X, centers).gather(1, labels.unsqueeze(1)).squeeze(1)
    if squared:
        distances = distances * distances
    return distances.sum().item()


def inertia(X: Tensor, labels: Tensor, centers: Tensor) -> float:
    """Within-cluster sum of squared Euclidean distances (WCSS)."""
    return total_cost(X, labels, centers, metric='euclidean', squared=True)
