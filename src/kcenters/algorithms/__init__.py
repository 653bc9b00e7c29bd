"""Clustering algorithm implementations."""

from .kmeans import KMeans
from .kmedians import KMedians
from .kmedoids import KMedoids, PAM
from .builder import ClusteringConfig, ClusteringBuilder, create_engine

__all__ = [
    'KMeans',
    'KMedians',
    'KMedoids',
    'PAM',
    'ClusteringConfig',
    'ClusteringBuilder',
    'create_engine'
]
