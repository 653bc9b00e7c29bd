"""
kcenters: partitional clustering around representative centers.

One assign/update engine drives several classic algorithms:
- K-means (mean centers, random or k-means++ seeding)
- K-medians (coordinate-wise median centers, L1 distance)
- K-medoids (Lloyd-style medoid swaps)
- PAM (BUILD seeding, global single-swap search)

Example usage:
    >>> import torch
    >>> from kcenters import KMeans, PAM, silhouette_score
    >>>
    >>> X = torch.randn(500, 4)
    >>>
    >>> kmeans = KMeans(n_clusters=5, random_state=0).fit(X)
    >>> pam = PAM(n_clusters=5, distance='manhattan').fit(X)
    >>>
    >>> silhouette_score(X, pam.labels_, metric='manhattan')
"""

__version__ = '0.1.0'

from .algorithms import (
    KMeans,
    KMedians,
    KMedoids,
    PAM,
    ClusteringConfig,
    ClusteringBuilder,
    create_engine
)

from .base import (
    ClusterEngine,
    ClusterState,
    AssignmentMatrix,
    AlgorithmState,
    InvalidConfiguration,
    InsufficientPoints,
    EmptyClusterWarning,
    NonConvergenceWarning
)

from .distances import (
    EuclideanDistance,
    ManhattanDistance,
    CallableDistance,
    DistanceMatrix
)

from .utils import (
    silhouette_samples,
    silhouette_score,
    total_cost,
    select_n_clusters,
    elbow_curve
)

__all__ = [
    # Algorithms
    'KMeans',
    'KMedians',
    'KMedoids',
    'PAM',
    'ClusterEngine',

    # Configuration
    'ClusteringConfig',
    'ClusteringBuilder',
    'create_engine',

    # Core data structures
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',

    # Errors and warnings
    'InvalidConfiguration',
    'InsufficientPoints',
    'EmptyClusterWarning',
    'NonConvergenceWarning',

    # Distances
    'EuclideanDistance',
    'ManhattanDistance',
    'CallableDistance',
    'DistanceMatrix',

    # Evaluation
    'silhouette_samples',
    'silhouette_score',
    'total_cost',
    'select_n_clusters',
    'elbow_curve',

    # Version
    '__version__'
]
