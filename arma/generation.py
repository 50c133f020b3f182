# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrix generators and the package-wide random number generator.

Every generator that takes a single size returns a `Col`; two sizes give a
`Mat`. All random fills draw from one module-level `numpy.random.Generator`,
reseeded with `set_seed`.
"""

import logging
from typing import Optional

import numpy as np

from .base import AbstractMat
from .exceptions import DimensionError
from .mat import Col, Fill, Mat
from .utils import check_vector

logger = logging.getLogger(__name__)

_rng = np.random.default_rng()


def get_rng() -> np.random.Generator:
    return _rng


def set_seed(seed: int) -> None:
    """Reseed the generator behind randu/randn/randi/shuffle."""
    global _rng
    _rng = np.random.default_rng(seed)
    logger.debug("random generator seeded with %r", seed)


def set_seed_random() -> None:
    global _rng
    _rng = np.random.default_rng()
    logger.debug("random generator reseeded from OS entropy")


def _make(n_rows: int, n_cols: Optional[int], fill: Fill):
    if n_rows < 0 or (n_cols is not None and n_cols < 0):
        raise DimensionError(f"Invalid size ({n_rows}, {n_cols}).")
    if n_cols is None:
        return Col(n_rows, fill=fill)
    return Mat(n_rows, n_cols, fill=fill)


def zeros(n_rows: int, n_cols: Optional[int] = None):
    return _make(n_rows, n_cols, Fill.ZEROS)


def ones(n_rows: int, n_cols: Optional[int] = None):
    return _make(n_rows, n_cols, Fill.ONES)


def eye(n_rows: int, n_cols: Optional[int] = None) -> Mat:
    """Identity-like matrix; a single size gives a square matrix."""
    return _make(n_rows, n_rows if n_cols is None else n_cols, Fill.EYE)


def randu(n_rows: int, n_cols: Optional[int] = None):
    return _make(n_rows, n_cols, Fill.RANDU)


def randn(n_rows: int, n_cols: Optional[int] = None):
    return _make(n_rows, n_cols, Fill.RANDN)


def randi(n_rows: int, n_cols: Optional[int] = None, low: int = 0, high: int = 2**31 - 2):
    """
    Integers drawn uniformly from the closed interval [low, high].

    Raises
    ------
    ValueError
        If low > high.
    """
    if low > high:
        raise ValueError(f"randi: low ({low}) must not exceed high ({high}).")
    result = _make(n_rows, n_cols, Fill.NONE)
    values = get_rng().integers(low, high, size=result.n_elem, endpoint=True)
    result.memptr()[:] = values
    return result


def linspace(start: float, end: float, n: int = 100) -> Col:
    """Column of `n` evenly spaced values from start to end, both included."""
    if n < 0:
        raise DimensionError(f"linspace: the number of elements ({n}) must be non-negative.")
    return Col._from_buffer(np.linspace(start, end, n))


def repmat(A: AbstractMat, copies_per_row: int, copies_per_col: int) -> Mat:
    """Tile A `copies_per_row` times vertically and `copies_per_col` times horizontally."""
    tiled = np.tile(A.to_numpy(), (copies_per_row, copies_per_col))
    return Mat(tiled)


def toeplitz(a: AbstractMat, b: Optional[AbstractMat] = None) -> Mat:
    """
    Toeplitz matrix with `a` as first column and `b` (default: `a`) as first row.

    Built one diagonal at a time through diagonal views.
    """
    check_vector(a, "toeplitz")
    col = a.values()
    if b is None:
        row = col
    else:
        check_vector(b, "toeplitz")
        row = b.values()

    result = Mat(col.size, row.size)
    if result.is_empty():
        return result
    result.diag(0).fill(col[0])
    for k in range(1, col.size):
        result.diag(-k).fill(col[k])
    for k in range(1, row.size):
        result.diag(k).fill(row[k])
    return result


def circ_toeplitz(a: AbstractMat) -> Mat:
    """Circulant matrix whose first column is `a`."""
    check_vector(a, "circ_toeplitz")
    values = a.values()
    n = values.size
    result = Mat(n, n)
    if n == 0:
        return result
    result.diag(0).fill(values[0])
    for k in range(1, n):
        result.diag(-k).fill(values[k])
        result.diag(n - k).fill(values[k])
    return result
