"""Utility functions for the clustering algorithms."""

from .convergence import (
    MaxIterations,
    ChangeInAssignments,
    ChangeInObjective
)

from .metrics import (
    pairwise_distances,
    silhouette_samples,
    silhouette_score,
    total_cost,
    inertia
)

from .validation import (
    validate_data,
    check_n_clusters,
    check_positive_int,
    check_random_state
)

from .model_selection import (
    select_n_clusters,
    elbow_curve
)

__all__ = [
    # Convergence criteria
    'MaxIterations',
    'ChangeInAssignments',
    'ChangeInObjective',

    # Metrics
    'pairwise_distances',
    'silhouette_samples',
    'silhouette_score',
    'total_cost',
    'inertia',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_positive_int',
    'check_random_state',

    # Choosing k
    'select_n_clusters',
    'elbow_curve'
]
