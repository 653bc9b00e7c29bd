"""
Choosing the number of clusters.

Both helpers refit a model once per candidate k, so their cost is the sum of
the individual fits.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..base.interfaces import DistanceMetric
from .metrics import silhouette_score
from .validation import validate_data


def _default_factory(random_state: Optional[int]):
    from ..algorithms.kmeans import KMeans

    def make_model(k: int):
        return KMeans(n_clusters=k, random_state=random_state)
    return make_model


def select_n_clusters(X, k_values: Iterable[int],
                      make_model: Optional[Callable[[int], object]] = None,
                      metric: Union[str, DistanceMetric, None] = None,
                      random_state: Optional[int] = 0) -> Tuple[int, Dict[int, float]]:
    """Pick the k whose fitted model has the highest mean silhouette.

    Args:
        X: (n, d) data points
        k_values: Candidate cluster counts, each at least 2
        make_model: Factory ``k -> unfitted model``; defaults to seeded KMeans
        metric: Metric for the silhouette; defaults to the model's own metric
        random_state: Seed for the default factory

    Returns:
        (best_k, {k: mean silhouette}); ties go to the smaller k
    """
    X = validate_data(X)
    make_model = make_model or _default_factory(random_state)

    scores: Dict[int, float] = {}
    for k in k_values:
        if k < 2:
            raise ValueError(f"Silhouette needs at least 2 clusters, got k={k}")
        model = make_model(k)
        labels = model.fit_predict(X)
        scoring_metric = metric or getattr(model, 'distance', 'euclidean')
        scores[k] = silhouette_score(X, labels, metric=scoring_metric)

    if not scores:
        raise ValueError("k_values is empty")

    best_k = max(sorted(scores), key=lambda k: scores[k])
    return best_k, scores


def elbow_curve(X, k_values: Iterable[int],
                make_model: Optional[Callable[[int], object]] = None,
                random_state: Optional[int] = 0) -> Tuple[List[int], List[float]]:
    """Final cost for each k, for locating the elbow by eye or by rule.

    Returns:
        (k values, costs) in the order given
    """
    X = validate_data(X)
    make_model = make_model or _default_factory(random_state)

    ks, costs = [], []
    for k in k_values:
        model = make_model(k)
        model.fit(X)
        ks.append(k)
        costs.append(model.cost_)
    return ks, costs
