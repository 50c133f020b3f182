# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from arma import Col, Mat, Row
from arma import statistics as st
from arma.exceptions import DimensionError, EmptyMatrixError

DATA = np.array(
    [
        [1.0, 7.0, -2.0],
        [4.0, 2.0, 0.0],
        [3.0, 5.0, 6.0],
        [8.0, -1.0, 2.0],
    ]
)


@pytest.mark.parametrize(
    "fn,ref",
    [
        (st.sum, np.sum),
        (st.prod, np.prod),
        (st.mean, np.mean),
        (st.median, np.median),
        (st.min, np.min),
        (st.max, np.max),
        (st.range, np.ptp),
    ],
)
@pytest.mark.parametrize("dim", [0, 1])
def test_reductions_along_dim(fn, ref, dim):
    out = fn(Mat(DATA), dim=dim)
    expected = ref(DATA, axis=dim)
    if dim == 0:
        assert isinstance(out, Row) and out.n_cols == DATA.shape[1]
    else:
        assert isinstance(out, Col) and out.n_rows == DATA.shape[0]
    np.testing.assert_allclose(out.values(), expected)


@pytest.mark.parametrize("vector", [Col, Row])
def test_vectors_reduce_to_scalars(vector):
    v = vector([3.0, 1.0, 2.0, 6.0])
    assert st.sum(v) == 12.0
    assert st.mean(v) == 3.0
    assert st.median(v) == 2.5
    assert st.min(v) == 1.0 and st.max(v) == 6.0
    assert st.range(v) == 5.0
    assert st.prod(v) == 36.0
    assert st.accu(v) == 12.0


@pytest.mark.parametrize("dim", [0, 1])
@pytest.mark.parametrize("norm_type,ddof", [(0, 1), (1, 0)])
def test_var_and_stddev(dim, norm_type, ddof):
    A = Mat(DATA)
    np.testing.assert_allclose(st.var(A, norm_type, dim).values(), np.var(DATA, axis=dim, ddof=ddof))
    np.testing.assert_allclose(
        st.stddev(A, norm_type, dim).values(), np.std(DATA, axis=dim, ddof=ddof)
    )


def test_var_of_single_sample_is_zero():
    assert st.var(Col([5.0])) == 0.0
    assert st.stddev(Row([1.0, 3.0])) == pytest.approx(np.sqrt(2.0))


def test_invalid_arguments():
    with pytest.raises(ValueError):
        st.sum(Mat(DATA), dim=2)
    with pytest.raises(ValueError):
        st.var(Mat(DATA), norm_type=3)
    with pytest.raises(EmptyMatrixError):
        st.mean(Mat())
    with pytest.raises(EmptyMatrixError):
        st.accu(Col())


def test_accu_on_views():
    A = Mat(DATA)
    assert st.accu(A) == DATA.sum()
    assert st.accu(A.submat(1, 1, 2, 2)) == DATA[1:3, 1:3].sum()


def test_any_and_all():
    assert st.any(Col([0.0, 0.0, 1.0])) is True
    assert st.all(Col([0.0, 1.0])) is False
    A = Mat([[0.0, 1.0], [0.0, 2.0]])
    np.testing.assert_array_equal(st.any(A).values(), [0.0, 1.0])
    np.testing.assert_array_equal(st.all(A, dim=1).values(), [0.0, 0.0])


def test_cumsum():
    r = st.cumsum(Row([1.0, 2.0, 3.0]))
    assert isinstance(r, Row)
    np.testing.assert_array_equal(r.values(), [1.0, 3.0, 6.0])
    np.testing.assert_array_equal(st.cumsum(Mat(DATA)).to_numpy(), np.cumsum(DATA, axis=0))
    np.testing.assert_array_equal(st.cumsum(Mat(DATA), 1).to_numpy(), np.cumsum(DATA, axis=1))


def test_cov_and_cor_match_numpy():
    A = Mat(DATA)
    np.testing.assert_allclose(st.cov(A).to_numpy(), np.cov(DATA, rowvar=False))
    np.testing.assert_allclose(st.cov(A, 1).to_numpy(), np.cov(DATA, rowvar=False, bias=True))
    np.testing.assert_allclose(st.cor(A).to_numpy(), np.corrcoef(DATA, rowvar=False))


def test_cross_covariance_of_vectors():
    x = Col([1.0, 2.0, 3.0, 4.0])
    y = Row([2.0, 4.0, 6.0, 9.0])
    c = st.cov(x, y)
    assert (c.n_rows, c.n_cols) == (1, 1)
    assert c.at(0) == pytest.approx(np.cov(x.values(), y.values())[0, 1])
    assert st.cor(x, x).at(0) == pytest.approx(1.0)
    with pytest.raises(DimensionError):
        st.cov(x, Col([1.0, 2.0]))


def test_hist_uniform_bins():
    counts = st.hist(Col(np.arange(10.0)), 10)
    assert isinstance(counts, Col)
    np.testing.assert_array_equal(counts.values(), np.ones(10))
    assert st.accu(st.hist(Row(np.random.default_rng(0).standard_normal(500)))) == 500


def test_hist_explicit_centres():
    centres = Col([0.0, 5.0, 10.0])
    v = Row([-100.0, 0.0, 2.5, 2.6, 7.4, 7.5, 11.0, np.nan])
    counts = st.hist(v, centres)
    assert isinstance(counts, Row)
    # 2.5 and 7.5 sit on a boundary and go to the lower bin
    np.testing.assert_array_equal(counts.values(), [3.0, 3.0, 1.0])
    with pytest.raises(ValueError):
        st.hist(v, Col([1.0, 0.0]))


def test_hist_per_column_and_row():
    A = Mat([[0.0, 10.0], [1.0, 10.0], [10.0, 10.0]])
    centres = Col([0.0, 10.0])
    np.testing.assert_array_equal(st.hist(A, centres).to_numpy(), [[2.0, 0.0], [1.0, 3.0]])
    np.testing.assert_array_equal(
        st.hist(A, centres, dim=1).to_numpy(), [[1.0, 1.0], [1.0, 1.0], [0.0, 2.0]]
    )


def test_histc():
    edges = Col([0.0, 1.0, 2.0, 3.0])
    v = Row([0.0, 1.0, 1.5, 2.0, 3.0, 5.0, -1.0])
    counts = st.histc(v, edges)
    assert isinstance(counts, Row)
    np.testing.assert_array_equal(counts.values(), [1.0, 2.0, 1.0, 1.0])
    with pytest.raises(ValueError):
        st.histc(v, Col([0.0, 0.0]))
    A = Mat([[0.5, 2.5], [0.7, 3.0]])
    np.testing.assert_array_equal(st.histc(A, edges).to_numpy(), [[2, 0], [0, 0], [0, 1], [0, 1]])


def test_hist_bin_count_shares_centres_across_matrix():
    # centres at 25 and 75 span the whole matrix, not each column
    A = Mat([[0.0, 0.0], [1.0, 100.0]])
    np.testing.assert_array_equal(st.hist(A, 2).to_numpy(), [[2.0, 1.0], [0.0, 1.0]])
    np.testing.assert_array_equal(st.hist(A, 2, dim=1).to_numpy(), [[2.0, 0.0], [1.0, 1.0]])
    counts = st.hist(Mat(np.random.default_rng(2).standard_normal((50, 4))), 5)
    np.testing.assert_array_equal(st.sum(counts).values(), [50.0] * 4)
