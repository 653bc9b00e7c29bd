# tests/test_convergence.py
"""
Early-stopping criteria for the mean/median loop.

Covers:
- ChangeInObjective: patience + relative tolerance handling
- ChangeInAssignments: fraction-changed threshold + patience
- MaxIterations never stops on its own
- reset() clears previous state

All tests run on CPU; these are pure logic checks (no heavy tensors).
"""

from __future__ import annotations

import torch

from kcenters.utils.convergence import (
    ChangeInObjective,
    ChangeInAssignments,
    MaxIterations,
)
from kcenters.base.data_structures import AssignmentMatrix


def test_change_in_objective_patience_and_thresholds(seed_all):
    """
    Two consecutive small relative changes (< rel_tol) trigger convergence
    with patience=2.
    """
    crit = ChangeInObjective(rel_tol=1e-3, abs_tol=1e-12, patience=2)

    # First value only initializes the previous objective
    assert crit.check({"iteration": 0, "objective": 100.0}) is False

    # 100.0 -> 99.95: rel 5e-4
    assert crit.check({"iteration": 1, "objective": 99.95}) is False

    # 99.95 -> 99.90005: rel ~5e-4
    assert crit.check({"iteration": 2, "objective": 99.90005}) is True
    assert len(crit.history) == 2


def test_change_in_objective_large_step_resets_patience(seed_all):
    crit = ChangeInObjective(rel_tol=1e-3, abs_tol=1e-12, patience=2)
    crit.check({"objective": 100.0})
    assert crit.check({"objective": 99.99}) is False
    assert crit.check({"objective": 50.0}) is False
    assert crit.check({"objective": 49.999}) is False
    assert crit.check({"objective": 49.999}) is True


def test_change_in_assignments_fraction(seed_all):
    """
    min_change_fraction is the threshold below which the labels count as
    stable. Two consecutive 10% changes (< 20%) converge with patience=2.
    """
    crit = ChangeInAssignments(min_change_fraction=0.2, patience=2)

    a0 = torch.zeros(10, dtype=torch.long)
    a1 = a0.clone()
    a1[0] = 1
    a2 = a1.clone()
    a2[1] = 1

    assert crit.check({"iteration": 0, "assignments": a0}) is False
    assert crit.check({"iteration": 1, "assignments": a1}) is False
    assert crit.check({"iteration": 2, "assignments": a2}) is True
    assert [h["n_changed"] for h in crit.history] == [1, 1]


def test_change_in_assignments_accepts_assignment_matrix(seed_all):
    crit = ChangeInAssignments(min_change_fraction=0.01)
    labels = AssignmentMatrix(torch.tensor([0, 1, 1, 0]), n_clusters=2)
    assert crit.check({"assignments": labels}) is False
    assert crit.check({"assignments": labels}) is True


def test_max_iterations_never_converges(seed_all):
    crit = MaxIterations()
    assert not any(crit.check({"iteration": i}) for i in range(50))


def test_reset_clears_previous_state(seed_all):
    crit = ChangeInAssignments(min_change_fraction=0.5)
    labels = torch.zeros(4, dtype=torch.long)
    crit.check({"assignments": labels})
    crit.reset()
    assert crit.history == []
    # First check after reset only records the labels
    assert crit.check({"assignments": labels}) is False

    obj = ChangeInObjective()
    obj.check({"objective": 1.0})
    obj.reset()
    assert obj.check({"objective": 1.0}) is False
