"""
Medoid representation for k-medoids and PAM.

A medoid is identified by its row in the point set. The coordinates are
looked up from that set on demand and never copied into the center.
"""

from typing import Dict
import torch
from torch import Tensor

from .base_representation import BaseRepresentation


class MedoidRepresentation(BaseRepresentation):
    """Cluster represented by one of the input points."""

    def __init__(self, points: Tensor, index: int):
        """
        Args:
            points: (n, d) point set the medoid belongs to
            index: Row of ``points`` acting as the center
        """
        super().__init__(points.shape[1], points.device)
        if not 0 <= index < points.shape[0]:
            raise IndexError(f"Medoid index {index} out of range for {points.shape[0]} points")
        self._points = points
        self._index = int(index)

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, value: int):
        if not 0 <= value < self._points.shape[0]:
            raise IndexError(f"Medoid index {value} out of range for {self._points.shape[0]} points")
        self._index = int(value)

    @property
    def center(self) -> Tensor:
        return self._points[self._index]

    def get_parameters(self) -> Dict[str, Tensor]:
        return {
            'center': self.center.clone(),
            'index': torch.tensor(self._index, dtype=torch.long)
        }

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        if 'index' in params:
            self.index = int(params['index'])

    def __repr__(self) -> str:
        return f"MedoidRepresentation(index={self._index})"
