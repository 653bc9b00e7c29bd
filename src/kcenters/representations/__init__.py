"""Cluster center representations."""

from .base_representation import BaseRepresentation
from .centroid import CentroidRepresentation
from .medoid import MedoidRepresentation

__all__ = [
    'BaseRepresentation',
    'CentroidRepresentation',
    'MedoidRepresentation'
]
