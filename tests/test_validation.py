# tests/test_validation.py
"""
Input validation and AssignmentMatrix.

Covers:
- `_validate_data` converts list / numpy -> torch.float32 on the right device
- Ragged, non-finite and wrongly shaped input raise InvalidConfiguration
- check_n_clusters / check_random_state
- AssignmentMatrix counts, partitions and empty clusters
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kcenters import KMeans
from kcenters.base.data_structures import AssignmentMatrix, ClusterState, SwapResult
from kcenters.base.exceptions import InvalidConfiguration, InsufficientPoints
from kcenters.utils.validation import (
    validate_data, check_n_clusters, check_positive_int, check_random_state
)


def test_validate_data_numpy_and_list_to_tensor(seed_all, torch_device):
    model = KMeans(n_clusters=2, random_state=0, device=torch_device)

    X_np = np.random.RandomState(0).randn(5, 3).astype(np.float64)
    X_t = model._validate_data(X_np)
    assert isinstance(X_t, torch.Tensor)
    assert X_t.dtype == torch.float32
    assert X_t.device.type == torch_device.type
    assert X_t.shape == (5, 3)

    X_t2 = model._validate_data([[1.0, 2.0, 3.0], [0.5, -0.1, 4.2]])
    assert X_t2.dtype == torch.float32
    assert X_t2.shape == (2, 3)


@pytest.mark.parametrize("X", [
    [[0.0, 1.0], [2.0]],
    np.array([np.zeros(2), np.zeros(3)], dtype=object),
    np.zeros((2, 2, 2)),
    [[0.0, np.nan]],
    [[np.inf, 0.0]],
    np.zeros((0, 3)),
])
def test_validate_data_rejects_bad_points(X):
    with pytest.raises(InvalidConfiguration):
        validate_data(X)


def test_validate_data_rejects_unknown_type():
    with pytest.raises(TypeError):
        validate_data("not points")


@pytest.mark.parametrize("k", [0, -1, 6, 2.0, True, None])
def test_check_n_clusters_rejects(k):
    with pytest.raises(InvalidConfiguration):
        check_n_clusters(k, 5)


def test_check_n_clusters_accepts_numpy_ints():
    check_n_clusters(np.int64(3), 5)
    check_n_clusters(5, 5)


def test_insufficient_points_is_invalid_configuration():
    assert issubclass(InsufficientPoints, InvalidConfiguration)
    assert issubclass(InvalidConfiguration, ValueError)


def test_check_positive_int():
    check_positive_int(1, "max_iter")
    for bad in (0, -3, 1.5, False):
        with pytest.raises(InvalidConfiguration):
            check_positive_int(bad, "max_iter")


def test_check_random_state():
    a = torch.randint(1000, (5,), generator=check_random_state(3))
    b = torch.randint(1000, (5,), generator=check_random_state(3))
    assert torch.equal(a, b)
    gen = torch.Generator()
    assert check_random_state(gen) is gen
    assert isinstance(check_random_state(None), torch.Generator)
    with pytest.raises(TypeError):
        check_random_state("seed")


def test_assignment_matrix_counts_and_partition(seed_all, torch_device):
    labels = torch.tensor([0, 2, 0, 2, 2], device=torch_device)
    am = AssignmentMatrix(labels, n_clusters=3)
    assert len(am) == 5
    assert am.count_per_cluster().tolist() == [2, 0, 3]
    assert am.empty_clusters() == [1]
    assert am.get_cluster_indices(2).tolist() == [1, 3, 4]
    assert am.to_partition() == {0: [0, 2], 1: [], 2: [1, 3, 4]}


@pytest.mark.parametrize("labels", [torch.tensor([0, 3]), torch.tensor([-1, 0]),
                                    torch.zeros(2, 2, dtype=torch.long)])
def test_assignment_matrix_rejects_bad_labels(labels):
    with pytest.raises(ValueError):
        AssignmentMatrix(labels, n_clusters=3)


def test_cluster_state_clone_is_independent():
    state = ClusterState(centers=torch.zeros(2, 3), n_clusters=2, dimension=3,
                         medoid_indices=torch.tensor([4, 1]))
    copy = state.clone()
    copy.centers[0, 0] = 5.0
    copy.medoid_indices[0] = 0
    assert state.centers[0, 0].item() == 0.0
    assert state.medoid_indices.tolist() == [4, 1]
    assert state.is_medoid


def test_swap_result_improved_flag():
    assert not SwapResult(torch.tensor([0]), 0, 1.0, 1.0).improved
    assert SwapResult(torch.tensor([1]), 1, 2.0, 1.0, [(0, 0, 1)]).improved
