"""
Early-stopping criteria for the mean and median algorithms.

Those algorithms run a fixed number of iterations by default (MaxIterations).
The medoid algorithms need none of these: they stop when no swap improves
the cost.
"""

from typing import Dict, Any
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class MaxIterations(ConvergenceCriterion):
    """Never stops early; the run is converged once max_iter iterations complete."""

    def check(self, current_state: Dict[str, Any]) -> bool:
        return False


class ChangeInAssignments(ConvergenceCriterion):
    """Stop once the fraction of points switching clusters stays small."""

    def __init__(self, min_change_fraction: float = 1e-4,
                 patience: int = 1):
        """
        Args:
            min_change_fraction: Fractions strictly below this count as stable
            patience: Consecutive stable iterations required
        """
        super().__init__()
        self.min_change_fraction = min_change_fraction
        self.patience = patience
        self._prev_labels = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        labels = current_state['assignments']
        if not isinstance(labels, Tensor):
            labels = labels.get_hard()

        if self._prev_labels is None:
            self._prev_labels = labels.clone()
            return False

        n_changed = int((labels != self._prev_labels).sum().item())
        change_fraction = n_changed / max(len(labels), 1)
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': change_fraction
        })

        if change_fraction < self.min_change_fraction:
            self._stable_count += 1
        else:
            self._stable_count = 0
        self._prev_labels = labels.clone()

        return self._stable_count >= self.patience

    def reset(self):
        super().reset()
        self._prev_labels = None
        self._stable_count = 0


class ChangeInObjective(ConvergenceCriterion):
    """Stop once the cost stops moving in relative or absolute terms."""

    def __init__(self, rel_tol: float = 1e-4, abs_tol: float = 1e-8,
                 patience: int = 1):
        super().__init__()
        self.rel_tol = rel_tol
        self.abs_tol = abs_tol
        self.patience = patience
        self._prev_objective = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        objective = float(current_state['objective'])

        if self._prev_objective is None:
            self._prev_objective = objective
            return False

        abs_change = abs(objective - self._prev_objective)
        scale = abs(self._prev_objective)
        rel_change = abs_change / scale if scale > 1e-10 else abs_change
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'objective': objective,
            'abs_change': abs_change,
            'rel_change': rel_change
        })

        if abs_change < self.abs_tol or rel_change < self.rel_tol:
            self._stable_count += 1
        else:
            self._stable_count = 0
        self._prev_objective = objective

        return self._stable_count >= self.patience

    def reset(self):
        super().reset()
        self._prev_objective = None
        self._stable_count = 0
