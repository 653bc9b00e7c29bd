"""Center update strategies for clustering algorithms."""

from .mean import MeanUpdater
from .median import MedianUpdater
from .medoid import LloydMedoidSwap, PAMSwap, assignment_cost

__all__ = [
    'MeanUpdater',
    'MedianUpdater',
    'LloydMedoidSwap',
    'PAMSwap',
    'assignment_cost'
]
