# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math

import numpy as np
import pytest

from arma import Col, Datum, Row, RunningStat, RunningStatVec
from arma.exceptions import ArmaError, DimensionError


def test_scalar_stream_matches_batch():
    samples = np.random.default_rng(0).normal(loc=3.0, scale=2.0, size=500)
    stats = RunningStat()
    for x in samples:
        stats(x)
    assert stats.count() == 500
    assert stats.mean() == pytest.approx(samples.mean())
    assert stats.var() == pytest.approx(samples.var(ddof=1))
    assert stats.var(1) == pytest.approx(samples.var())
    assert stats.stddev() == pytest.approx(samples.std(ddof=1))
    assert stats.min() == samples.min()
    assert stats.max() == samples.max()


def test_fresh_and_reset_state():
    stats = RunningStat()
    assert stats.count() == 0
    assert math.isnan(stats.mean()) and math.isnan(stats.var())
    stats.update(4.0)
    assert stats.var() == 0.0 and stats.mean() == 4.0
    stats.reset()
    assert stats.count() == 0 and math.isnan(stats.max())


def test_invalid_samples_and_arguments():
    stats = RunningStat()
    with pytest.raises(ValueError):
        stats.update(float("nan"))
    with pytest.raises(ValueError):
        stats.var(2)
    stats.update(1.0)
    stats._count = 2.0**53
    with pytest.raises(OverflowError):
        stats.update(1.0)


def test_vector_stream_matches_batch():
    samples = np.random.default_rng(1).normal(size=(200, 3))
    stats = RunningStatVec(calc_cov=True)
    for x in samples:
        stats(Col(x))
    assert stats.count() == 200
    np.testing.assert_allclose(stats.mean().values(), samples.mean(axis=0))
    np.testing.assert_allclose(stats.var().values(), samples.var(axis=0, ddof=1))
    np.testing.assert_allclose(stats.var(1).values(), samples.var(axis=0))
    np.testing.assert_allclose(stats.stddev().values(), samples.std(axis=0, ddof=1))
    np.testing.assert_array_equal(stats.min().values(), samples.min(axis=0))
    np.testing.assert_array_equal(stats.max().values(), samples.max(axis=0))
    np.testing.assert_allclose(stats.cov().to_numpy(), np.cov(samples, rowvar=False))
    np.testing.assert_allclose(stats.cov(1).to_numpy(), np.cov(samples, rowvar=False, bias=True))


def test_vector_getters_return_copies():
    stats = RunningStatVec()
    stats.update(Row([1.0, 2.0]))
    stats.mean().fill(0.0)
    np.testing.assert_array_equal(stats.mean().values(), [1.0, 2.0])


def test_vector_stream_errors():
    stats = RunningStatVec()
    stats.update(Col([1.0, 2.0]))
    with pytest.raises(DimensionError):
        stats.update(Col([1.0, 2.0, 3.0]))
    with pytest.raises(ValueError):
        stats.update(Col([np.nan, 1.0]))
    with pytest.raises(ArmaError):
        stats.cov()
    stats.reset()
    assert stats.count() == 0 and stats.mean().is_empty()


def test_constants():
    assert Datum.pi == math.pi
    assert Datum.eps == np.finfo(float).eps
    assert Datum.log_max == pytest.approx(709.78, abs=0.01)
    assert Datum.c_0 == 299792458.0
