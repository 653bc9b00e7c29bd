import warnings

import numpy as np
import pytest
import torch

from utils import time_block
from data_gen import make_uniform

from kcenters import KMeans, KMedians, KMedoids, PAM
from kcenters.base.exceptions import EmptyClusterWarning, InvalidConfiguration


@pytest.mark.parametrize("model_cls", [KMeans, KMedians, KMedoids, PAM])
def test_all_identical_points(seed_all, model_cls):
    """
    Every point the same: seeding falls back to uniform draws, every
    distance is zero and the run still completes with zero cost.
    """
    X = torch.ones(12, 3)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", EmptyClusterWarning)
        model = model_cls(3, random_state=0) if model_cls is not PAM else PAM(3)
        model.fit(X)
    assert model.cost_ == 0.0
    assert model.labels_.shape == (12,)
    assert torch.isfinite(model.cluster_centers_).all()


@pytest.mark.parametrize("model_cls", [KMeans, KMedians, KMedoids, PAM])
def test_single_point_single_cluster(model_cls):
    model = model_cls(1).fit([[3.0, -1.0]])
    assert model.labels_.tolist() == [0]
    assert model.cost_ == 0.0
    assert model.cluster_centers_.tolist() == [[3.0, -1.0]]


def test_one_dimensional_input_is_a_column():
    model = PAM(2).fit([0.0, 1.0, 2.0, 10.0, 11.0])
    assert model.cluster_centers_.shape == (2, 1)
    assert sorted(model.medoid_indices_.tolist()) == [1, 3]


@pytest.mark.parametrize("d", [1, 2, 8, 50])
def test_any_dimension(seed_all, d):
    X = make_uniform(np.random.default_rng(d), 60, d)
    with time_block("kmeans-any-d", meta={"n": 60, "d": d, "k": 3}):
        km = KMeans(3, random_state=0).fit(X)
    assert km.cluster_centers_.shape == (3, d)
    pam = PAM(3).fit(X)
    assert pam.cluster_centers_.shape == (3, d)


def test_k_equals_n_for_pam():
    X = torch.tensor([[0.0], [5.0], [9.0]])
    model = PAM(3).fit(X)
    assert sorted(model.medoid_indices_.tolist()) == [0, 1, 2]
    assert model.cost_ == 0.0
    # No non-medoid candidates: a single non-improving round
    assert model.n_iter_ == 1


def test_empty_input_rejected():
    with pytest.raises(InvalidConfiguration):
        KMeans(1).fit(np.zeros((0, 2)))


def test_three_dimensional_input_rejected():
    with pytest.raises(InvalidConfiguration):
        KMeans(1).fit(np.zeros((2, 2, 2)))


def test_heavily_duplicated_data_with_more_clusters_than_distinct_points():
    """Two distinct locations but k=3: mean mode must still hand every cluster a point."""
    X = torch.tensor([[0.0, 0.0]] * 5 + [[10.0, 10.0]] * 5)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", EmptyClusterWarning)
        model = KMeans(3, random_state=0, max_iter=5).fit(X)
    assert model.cost_ == pytest.approx(0.0)
    for state in model.history_:
        assert state.assignments.empty_clusters() == []
