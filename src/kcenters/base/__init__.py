"""Base classes and interfaces for the clustering engine."""

from .interfaces import (
    ClusterRepresentation,
    DistanceMetric,
    InitializationStrategy,
    CenterStrategy,
    CenterUpdater,
    MedoidSwapStrategy,
    ConvergenceCriterion
)

from .exceptions import (
    InvalidConfiguration,
    InsufficientPoints,
    EmptyClusterWarning,
    NonConvergenceWarning
)

from .data_structures import (
    ClusterState,
    AssignmentMatrix,
    SwapResult,
    AlgorithmState
)

from .clustering_base import ClusterEngine

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'DistanceMetric',
    'InitializationStrategy',
    'CenterStrategy',
    'CenterUpdater',
    'MedoidSwapStrategy',
    'ConvergenceCriterion',

    # Errors and warnings
    'InvalidConfiguration',
    'InsufficientPoints',
    'EmptyClusterWarning',
    'NonConvergenceWarning',

    # Data structures
    'ClusterState',
    'AssignmentMatrix',
    'SwapResult',
    'AlgorithmState',

    # Engine
    'ClusterEngine'
]
