# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Streaming statistics.

Both accumulators update their mean and variance incrementally (Welford
style) so a sample never needs to be stored. `var(0)` normalises by N - 1,
`var(1)` by N.
"""

import numpy as np

from .base import AbstractMat
from .exceptions import ArmaError, DimensionError
from .mat import Col, Mat
from .op import Op
from .utils import check_not_empty, check_vector

# beyond 2**53 the sample count can no longer be represented exactly
_MAX_COUNT = 2.0**53


def _check_norm_type(norm_type: int) -> None:
    if norm_type not in (0, 1):
        raise ValueError(f"norm_type must be 0 or 1, got {norm_type!r}.")


def _check_count(count: float) -> None:
    if count >= _MAX_COUNT:
        raise OverflowError("No more than 2**53 samples can be processed without loss of precision.")


class RunningStat:
    """
    Running statistics of a stream of scalars.

    Before the first update min, max, mean and var are NaN.

    Example
    -------
    >>> stats = RunningStat()
    >>> for x in (1.0, 2.0, 3.0):
    ...     stats.update(x)
    >>> stats.mean(), stats.var()
    (2.0, 1.0)
    """

    def __init__(self):
        self.reset()

    def update(self, sample: float) -> None:
        sample = float(sample)
        if np.isnan(sample):
            raise ValueError("NaN is not a valid sample value.")
        n = self._count
        if n > 0:
            _check_count(n)
            self._max = max(self._max, sample)
            self._min = min(self._min, sample)
            self._var = (n - 1) / n * self._var + (sample - self._mean) ** 2 / (n + 1)
            self._mean += (sample - self._mean) / (n + 1)
        else:
            self._max = self._min = self._mean = sample
            self._var = 0.0
        self._count += 1

    def __call__(self, sample: float) -> None:
        self.update(sample)

    def count(self) -> float:
        return self._count

    def min(self) -> float:
        return self._min

    def max(self) -> float:
        return self._max

    def mean(self) -> float:
        return self._mean

    def var(self, norm_type: int = 0) -> float:
        _check_norm_type(norm_type)
        if norm_type == 1 and self._count > 0:
            return (self._count - 1) / self._count * self._var
        return self._var

    def stddev(self, norm_type: int = 0) -> float:
        return float(np.sqrt(self.var(norm_type)))

    def reset(self) -> None:
        self._min = self._max = self._mean = self._var = float("nan")
        self._count = 0.0


class RunningStatVec:
    """
    Running statistics of a stream of vectors, element by element.

    Parameters
    ----------
    calc_cov : bool
        Also accumulate the covariance matrix of the vector elements.
    """

    def __init__(self, calc_cov: bool = False):
        self._calc_cov = calc_cov
        self.reset()

    def update(self, sample: AbstractMat) -> None:
        check_not_empty(sample, "RunningStatVec.update")
        check_vector(sample, "RunningStatVec.update")
        x = Col(sample)
        if np.any(np.isnan(x.memptr())):
            raise ValueError("NaN is not a valid sample value for any element.")
        n = self._count
        if n > 0:
            _check_count(n)
            if x.n_elem != self._mean.n_elem:
                raise DimensionError(
                    f"RunningStatVec.update: expected {self._mean.n_elem} elements, "
                    f"got {x.n_elem}."
                )
            delta = x - self._mean
            if self._calc_cov:
                self._cov.in_place(Op.TIMES, (n - 1) / n)
                self._cov.in_place(Op.PLUS, (delta @ delta.t()) / (n + 1))
            np.maximum(self._max.memptr(), x.memptr(), out=self._max.memptr())
            np.minimum(self._min.memptr(), x.memptr(), out=self._min.memptr())
            self._var.in_place(Op.TIMES, (n - 1) / n)
            self._var.in_place(Op.PLUS, delta * delta / (n + 1))
            self._mean.in_place(Op.PLUS, delta / (n + 1))
        else:
            self._cov = Mat(x.n_elem, x.n_elem)
            self._max = Col(x)
            self._min = Col(x)
            self._mean = Col(x)
            self._var = Col(x.n_elem)
        self._count += 1

    def __call__(self, sample: AbstractMat) -> None:
        self.update(sample)

    def count(self) -> float:
        return self._count

    def min(self) -> Col:
        return self._min.copy()

    def max(self) -> Col:
        return self._max.copy()

    def mean(self) -> Col:
        return self._mean.copy()

    def var(self, norm_type: int = 0) -> Col:
        _check_norm_type(norm_type)
        if norm_type == 1 and self._count > 0:
            return self._var * ((self._count - 1) / self._count)
        return self._var.copy()

    def stddev(self, norm_type: int = 0) -> Col:
        v = self.var(norm_type)
        return Col._from_buffer(np.sqrt(v.memptr()))

    def cov(self, norm_type: int = 0) -> Mat:
        if not self._calc_cov:
            raise ArmaError(
                "The covariance is only accumulated when constructed with calc_cov=True."
            )
        _check_norm_type(norm_type)
        if norm_type == 1 and self._count > 0:
            return self._cov * ((self._count - 1) / self._count)
        return self._cov.copy()

    def reset(self) -> None:
        self._min = Col()
        self._max = Col()
        self._mean = Col()
        self._var = Col()
        self._cov = Mat()
        self._count = 0.0
