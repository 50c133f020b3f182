# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Statistics over vectors and matrices.

Conventions
-----------
- Vector input (either orientation) reduces to a float.
- Matrix input reduces along `dim`: 0 gives one value per column (a `Row`),
  1 gives one value per row (a `Col`).
- `norm_type` 0 normalises by N - 1 (N when N == 1), 1 normalises by N.
- Empty input raises `EmptyMatrixError`.
"""

import numpy as np

from .base import AbstractMat
from .exceptions import DimensionError
from .mat import Col, Mat, Row
from .utils import HIST_BINS, check_not_empty, check_vector


def _check_dim(dim: int) -> None:
    if dim not in (0, 1):
        raise ValueError(f"dim must be 0 or 1, got {dim!r}.")


def _check_norm_type(norm_type: int) -> None:
    if norm_type not in (0, 1):
        raise ValueError(f"norm_type must be 0 or 1, got {norm_type!r}.")


def _denominator(n: int, norm_type: int) -> int:
    _check_norm_type(norm_type)
    if norm_type == 1:
        return n
    return n - 1 if n > 1 else 1


def _reduce(X: AbstractMat, fn, dim: int, name: str):
    """Apply fn (taking an ndarray and an axis) to a vector or along dim."""
    check_not_empty(X, name)
    _check_dim(dim)
    if X.is_vec():
        return float(fn(X.values(), 0))
    values = np.asarray(fn(X.to_numpy(), dim), dtype=float)
    if dim == 0:
        return Row._from_buffer(values)
    return Col._from_buffer(values)


def accu(X: AbstractMat) -> float:
    """Sum of all elements, regardless of shape."""
    check_not_empty(X, "accu")
    return float(np.sum(X.values()))


def sum(X: AbstractMat, dim: int = 0):
    return _reduce(X, lambda a, ax: np.sum(a, axis=ax), dim, "sum")


def prod(X: AbstractMat, dim: int = 0):
    return _reduce(X, lambda a, ax: np.prod(a, axis=ax), dim, "prod")


def mean(X: AbstractMat, dim: int = 0):
    return _reduce(X, lambda a, ax: np.mean(a, axis=ax), dim, "mean")


def median(X: AbstractMat, dim: int = 0):
    return _reduce(X, lambda a, ax: np.median(a, axis=ax), dim, "median")


def var(X: AbstractMat, norm_type: int = 0, dim: int = 0):
    _check_norm_type(norm_type)

    def _var(a, ax):
        n = a.shape[ax] if a.ndim > 1 else a.size
        centred = a - np.mean(a, axis=ax, keepdims=a.ndim > 1)
        return np.sum(centred**2, axis=ax) / _denominator(n, norm_type)

    return _reduce(X, _var, dim, "var")


def stddev(X: AbstractMat, norm_type: int = 0, dim: int = 0):
    v = var(X, norm_type, dim)
    if isinstance(v, float):
        return float(np.sqrt(v))
    return v._new(np.sqrt(v.values()), v.n_rows, v.n_cols)


def min(X: AbstractMat, dim: int = 0):
    return _reduce(X, lambda a, ax: np.min(a, axis=ax), dim, "min")


def max(X: AbstractMat, dim: int = 0):
    return _reduce(X, lambda a, ax: np.max(a, axis=ax), dim, "max")


def range(X: AbstractMat, dim: int = 0):
    """max - min along dim."""
    return _reduce(X, lambda a, ax: np.ptp(a, axis=ax), dim, "range")


def any(X: AbstractMat, dim: int = 0):
    """Whether any element is non-zero; 0/1 per column or row for matrices."""
    check_not_empty(X, "any")
    if X.is_vec():
        return bool(np.any(X.values() != 0))
    return _reduce(X, lambda a, ax: np.any(a != 0, axis=ax), dim, "any")


def all(X: AbstractMat, dim: int = 0):
    check_not_empty(X, "all")
    if X.is_vec():
        return bool(np.all(X.values() != 0))
    return _reduce(X, lambda a, ax: np.all(a != 0, axis=ax), dim, "all")


def cumsum(X: AbstractMat, dim: int = 0):
    """Cumulative sum; vectors keep their orientation, matrices their shape."""
    check_not_empty(X, "cumsum")
    _check_dim(dim)
    if X.is_vec():
        return X._new(np.cumsum(X.values()), X.n_rows, X.n_cols)
    return Mat(np.cumsum(X.to_numpy(), axis=dim))


def _observations(X: AbstractMat) -> np.ndarray:
    """Observations in rows, variables in columns; a vector is one variable."""
    if X.is_vec():
        return X.values().reshape(-1, 1)
    return X.to_numpy()


def _cross_cov(X: AbstractMat, Y: AbstractMat, norm_type: int, name: str) -> np.ndarray:
    check_not_empty(X, name)
    check_not_empty(Y, name)
    a = _observations(X)
    b = _observations(Y)
    if a.shape[0] != b.shape[0]:
        raise DimensionError(
            f"{name}: both inputs need the same number of observations, got "
            f"{a.shape[0]} and {b.shape[0]}."
        )
    a = a - a.mean(axis=0)
    b = b - b.mean(axis=0)
    return (a.T @ b) / _denominator(a.shape[0], norm_type)


def cov(X: AbstractMat, Y=None, norm_type: int = 0) -> Mat:
    """
    Covariance matrix.

    Parameters
    ----------
    X, Y : AbstractMat
        Columns are variables, rows are observations; a vector is a single
        variable. With Y, the cross-covariance of X's and Y's variables.
    norm_type : int
        0 divides by N - 1, 1 divides by N.
    """
    if isinstance(Y, int):
        Y, norm_type = None, Y
    return Mat(_cross_cov(X, X if Y is None else Y, norm_type, "cov"))


def cor(X: AbstractMat, Y=None, norm_type: int = 0) -> Mat:
    """Correlation matrix; arguments as for `cov`."""
    if isinstance(Y, int):
        Y, norm_type = None, Y
    Y = X if Y is None else Y
    c = _cross_cov(X, Y, norm_type, "cor")
    sx = np.sqrt(np.diag(_cross_cov(X, X, norm_type, "cor")))
    sy = np.sqrt(np.diag(_cross_cov(Y, Y, norm_type, "cor")))
    with np.errstate(divide="ignore", invalid="ignore"):
        return Mat(c / np.outer(sx, sy))


def _default_centers(values: np.ndarray, n_bins: int) -> np.ndarray:
    finite = values[np.isfinite(values)]
    lo, hi = (float(finite.min()), float(finite.max())) if finite.size else (0.0, 0.0)
    if lo == hi:
        lo, hi = lo - 0.5, hi + 0.5
    delta = (hi - lo) / n_bins
    return lo + (np.arange(n_bins) + 0.5) * delta


def _count_nearest(values: np.ndarray, centers: np.ndarray) -> np.ndarray:
    values = values[~np.isnan(values)]
    boundaries = (centers[:-1] + centers[1:]) / 2
    # ties at a boundary go to the lower bin
    bins = np.searchsorted(boundaries, values, side="left")
    return np.bincount(bins, minlength=centers.size).astype(float)


def _per_dim(X: AbstractMat, counter, dim: int):
    if X.is_vec():
        counts = counter(X.values())
        return X._new(counts, *((counts.size, 1) if X.is_colvec() else (1, counts.size)))
    _check_dim(dim)
    grid = X.to_numpy()
    if dim == 0:
        out = np.column_stack([counter(grid[:, j]) for j in np.arange(grid.shape[1])])
    else:
        out = np.vstack([counter(grid[i, :]) for i in np.arange(grid.shape[0])])
    return Mat(out)


def hist(X: AbstractMat, bins=HIST_BINS, dim: int = 0):
    """
    Histogram by nearest bin centre.

    `bins` is either a number of uniformly spaced centres between the finite
    minimum and maximum of all of X, shared by every column and row, or a
    vector of increasing centres. Values below the first or above the last
    boundary fall in the outer bins; NaN is ignored. Vectors give a vector
    of counts with the input's orientation, matrices one column (dim 0) or
    one row (dim 1) of counts per column/row.
    """
    check_not_empty(X, "hist")
    if isinstance(bins, AbstractMat):
        check_vector(bins, "hist")
        centers = bins.values()
        if np.any(np.diff(centers) < 0):
            raise ValueError("hist: the centres must be monotonically increasing.")
    else:
        n_bins = int(bins)
        if n_bins < 1:
            raise ValueError(f"hist: the number of bins ({n_bins}) must be positive.")
        centers = _default_centers(X.values(), n_bins)
    return _per_dim(X, lambda v: _count_nearest(v, centers), dim)


def histc(X: AbstractMat, edges: AbstractMat, dim: int = 0):
    """
    Histogram over explicit edges.

    Bin k counts edges[k] <= x < edges[k+1]; the last bin counts x == edges[-1].
    Values outside [edges[0], edges[-1]] are ignored.
    """
    check_not_empty(X, "histc")
    check_vector(edges, "histc")
    e = edges.values()
    if np.any(np.diff(e) <= 0):
        raise ValueError("histc: the edges must be strictly increasing.")

    def counter(v):
        counts = np.zeros(e.size)
        inside = v[(v >= e[0]) & (v < e[-1])]
        np.add.at(counts, np.searchsorted(e, inside, side="right") - 1, 1.0)
        counts[-1] += np.count_nonzero(v == e[-1])
        return counts

    return _per_dim(X, counter, dim)
