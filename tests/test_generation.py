# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest
import scipy.linalg

import arma
from arma import Col, Mat
from arma.exceptions import DimensionError


@pytest.mark.parametrize("fn", [arma.zeros, arma.ones, arma.randu, arma.randn])
def test_one_size_gives_col_two_give_mat(fn):
    c = fn(4)
    assert isinstance(c, Col) and (c.n_rows, c.n_cols) == (4, 1)
    A = fn(2, 3)
    assert type(A) is Mat and (A.n_rows, A.n_cols) == (2, 3)


def test_fill_values():
    np.testing.assert_array_equal(arma.zeros(2, 2).to_numpy(), np.zeros((2, 2)))
    np.testing.assert_array_equal(arma.ones(3).values(), np.ones(3))
    np.testing.assert_array_equal(arma.eye(3).to_numpy(), np.eye(3))
    np.testing.assert_array_equal(arma.eye(2, 4).to_numpy(), np.eye(2, 4))
    u = arma.randu(200, 5).values()
    assert u.min() >= 0.0 and u.max() < 1.0


def test_negative_size_is_rejected():
    with pytest.raises(DimensionError):
        arma.zeros(-1)
    with pytest.raises(DimensionError):
        arma.linspace(0.0, 1.0, -2)


def test_seed_makes_draws_reproducible():
    arma.set_seed(123)
    a = arma.randn(5, 5).to_numpy()
    arma.set_seed(123)
    b = arma.randn(5, 5).to_numpy()
    np.testing.assert_array_equal(a, b)
    arma.set_seed_random()
    assert arma.randu(3).n_elem == 3


def test_randi_bounds_are_inclusive():
    arma.set_seed(7)
    values = arma.randi(2000, low=3, high=5).values()
    assert set(np.unique(values)) == {3.0, 4.0, 5.0}
    assert arma.randi(2, 2).to_numpy().min() >= 0
    with pytest.raises(ValueError):
        arma.randi(3, low=2, high=1)


def test_linspace():
    v = arma.linspace(0.0, 1.0, 5)
    assert isinstance(v, Col)
    np.testing.assert_allclose(v.values(), [0.0, 0.25, 0.5, 0.75, 1.0])
    assert arma.linspace(0.0, 1.0).n_elem == 100


def test_repmat():
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_array_equal(arma.repmat(Mat(a), 2, 3).to_numpy(), np.tile(a, (2, 3)))


def test_toeplitz_matches_scipy():
    a = np.array([1.0, 2.0, 3.0, 4.0])
    b = np.array([1.0, -1.0, -2.0])
    np.testing.assert_array_equal(arma.toeplitz(Col(a)).to_numpy(), scipy.linalg.toeplitz(a))
    np.testing.assert_array_equal(
        arma.toeplitz(Col(a), arma.Row(b)).to_numpy(), scipy.linalg.toeplitz(a, b)
    )
    with pytest.raises(DimensionError):
        arma.toeplitz(Mat(2, 2))


def test_circ_toeplitz_matches_scipy():
    a = np.array([1.0, 2.0, 3.0, 4.0])
    np.testing.assert_array_equal(arma.circ_toeplitz(Col(a)).to_numpy(), scipy.linalg.circulant(a))
    assert arma.circ_toeplitz(Col()).is_empty()
