# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Reshaping, joining, sorting and other structural functions.

Every function returns a new container; inputs are never modified.
"""

import numpy as np

from .base import AbstractMat
from .exceptions import DimensionError
from .mat import Col, Mat, Row
from .utils import check_not_empty, check_square, check_vector


def _like(X: AbstractMat, values: np.ndarray, n_rows: int, n_cols: int):
    return X._new(np.asarray(values, dtype=float), n_rows, n_cols)


def _check_direction(sort_direction: str) -> bool:
    if sort_direction not in ("ascend", "descend"):
        raise ValueError(
            f'sort_direction must be "ascend" or "descend", got {sort_direction!r}.'
        )
    return sort_direction == "descend"


def trans(X: AbstractMat):
    return X.t()


def dot(A: AbstractMat, B: AbstractMat) -> float:
    """Sum of element-wise products of two equally sized vectors or matrices."""
    if A.n_elem != B.n_elem:
        raise DimensionError(
            f"dot: both operands need the same number of elements, got "
            f"{A.n_elem} and {B.n_elem}."
        )
    return float(np.dot(A.values(), B.values()))


def norm_dot(A: AbstractMat, B: AbstractMat) -> float:
    """dot(A, B) normalised by the 2-norms of A and B."""
    d = dot(A, B)
    scale = np.linalg.norm(A.values()) * np.linalg.norm(B.values())
    if scale == 0:
        return 0.0
    return float(d / scale)


_NAMED_NORMS = {"inf": np.inf, "-inf": -np.inf, "fro": "fro"}


def norm(X: AbstractMat, p=2) -> float:
    """
    Vector or matrix norm.

    Vectors accept any integer p >= 1, "inf", "-inf" and "fro". Matrices
    accept 1, 2, "inf" and "fro"; the 2-norm is the largest singular value.
    """
    check_not_empty(X, "norm")
    if isinstance(p, str):
        if p not in _NAMED_NORMS:
            raise ValueError(f"norm: unknown norm type {p!r}.")
        ord_ = _NAMED_NORMS[p]
    else:
        ord_ = p
    if X.is_vec():
        if ord_ == "fro":
            ord_ = 2
        elif not np.isinf(ord_) and (ord_ < 1 or ord_ != int(ord_)):
            raise ValueError(f"norm: p must be an integer >= 1, got {p!r}.")
        return float(np.linalg.norm(X.values(), ord=ord_))
    if ord_ not in (1, 2, np.inf, "fro"):
        raise ValueError(f"norm: p={p!r} is not supported for matrices.")
    return float(np.linalg.norm(X.to_numpy(), ord=ord_))


def trace(X: AbstractMat) -> float:
    """Sum of the main diagonal (any shape)."""
    return float(np.trace(X.to_numpy()))


def as_scalar(X: AbstractMat) -> float:
    if X.n_elem != 1:
        raise DimensionError(
            f"as_scalar: expected a 1x1 matrix, got ({X.n_rows}, {X.n_cols})."
        )
    return X.at(0)


def is_finite(X) -> bool:
    if isinstance(X, AbstractMat):
        return X.is_finite()
    return bool(np.isfinite(X))


def join_cols(A: AbstractMat, B: AbstractMat) -> Mat:
    """Stack B below A."""
    if A.is_empty():
        return Mat(B)
    if B.is_empty():
        return Mat(A)
    if A.n_cols != B.n_cols:
        raise DimensionError(
            f"join_cols: both operands need the same number of columns, got "
            f"{A.n_cols} and {B.n_cols}."
        )
    return Mat(np.vstack([A.to_numpy(), B.to_numpy()]))


join_vert = join_cols


def join_rows(A: AbstractMat, B: AbstractMat) -> Mat:
    """Place B to the right of A."""
    if A.is_empty():
        return Mat(B)
    if B.is_empty():
        return Mat(A)
    if A.n_rows != B.n_rows:
        raise DimensionError(
            f"join_rows: both operands need the same number of rows, got "
            f"{A.n_rows} and {B.n_rows}."
        )
    return Mat(np.hstack([A.to_numpy(), B.to_numpy()]))


join_horiz = join_rows


def sort(X: AbstractMat, sort_direction: str = "ascend", dim: int = 0):
    """Sort a vector, or each column (dim 0) / row (dim 1) of a matrix."""
    descend = _check_direction(sort_direction)
    if X.is_vec():
        values = np.sort(X.values())
        return _like(X, values[::-1] if descend else values, X.n_rows, X.n_cols)
    if dim not in (0, 1):
        raise ValueError(f"dim must be 0 or 1, got {dim!r}.")
    grid = np.sort(X.to_numpy(), axis=dim)
    if descend:
        grid = np.flip(grid, axis=dim)
    return Mat(grid)


def _sort_index(X: AbstractMat, sort_direction: str, kind: str) -> Col:
    descend = _check_direction(sort_direction)
    check_vector(X, "sort_index")
    values = X.values()
    order = np.argsort(-values if descend else values, kind=kind)
    return Col._from_buffer(order.astype(float))


def sort_index(X: AbstractMat, sort_direction: str = "ascend") -> Col:
    """Indices that would sort the vector X."""
    return _sort_index(X, sort_direction, "quicksort")


def stable_sort_index(X: AbstractMat, sort_direction: str = "ascend") -> Col:
    """Like `sort_index`, keeping equal elements in their original order."""
    return _sort_index(X, sort_direction, "stable")


def reshape(X: AbstractMat, n_rows: int, n_cols: int) -> Mat:
    result = Mat(X)
    result.reshape(n_rows, n_cols)
    return result


def resize(X: AbstractMat, n_rows: int, n_cols: int) -> Mat:
    result = Mat(X)
    result.resize(n_rows, n_cols)
    return result


def fliplr(X: AbstractMat):
    return _like(X, np.fliplr(X.to_numpy()).ravel(order="F"), X.n_rows, X.n_cols)


def flipud(X: AbstractMat):
    return _like(X, np.flipud(X.to_numpy()).ravel(order="F"), X.n_rows, X.n_cols)


def diagmat(X: AbstractMat) -> Mat:
    """Diagonal matrix from a vector, or X with everything off the diagonal zeroed."""
    if X.is_vec():
        return Mat(np.diag(X.values()))
    grid = X.to_numpy()
    out = np.zeros_like(grid)
    k = np.arange(min(grid.shape))
    out[k, k] = grid[k, k]
    return Mat(out)


def diagvec(X: AbstractMat, k: int = 0) -> Col:
    """Copy of the k-th diagonal as a column."""
    return Col(X.diag(k))


def trimatu(X: AbstractMat) -> Mat:
    check_square(X, "trimatu")
    return Mat(np.triu(X.to_numpy()))


def trimatl(X: AbstractMat) -> Mat:
    check_square(X, "trimatl")
    return Mat(np.tril(X.to_numpy()))


def symmatu(X: AbstractMat) -> Mat:
    """Symmetric matrix built by mirroring the upper triangle."""
    check_square(X, "symmatu")
    upper = np.triu(X.to_numpy())
    return Mat(upper + np.triu(upper, 1).T)


def symmatl(X: AbstractMat) -> Mat:
    check_square(X, "symmatl")
    lower = np.tril(X.to_numpy())
    return Mat(lower + np.tril(lower, -1).T)


def find(X: AbstractMat, k: int = 0, s: str = "first") -> Col:
    """
    Linear indices of the non-zero elements.

    k > 0 keeps at most k of them, taken from the start ("first") or the end
    ("last").
    """
    if s not in ("first", "last"):
        raise ValueError(f'find: s must be "first" or "last", got {s!r}.')
    if k < 0:
        raise ValueError(f"find: k ({k}) must be non-negative.")
    found = np.flatnonzero(X.values())
    if k > 0:
        found = found[:k] if s == "first" else found[-k:]
    return Col._from_buffer(found.astype(float))


def conv(A: AbstractMat, B: AbstractMat):
    """Full 1-D convolution; the result takes A's orientation."""
    check_vector(A, "conv")
    check_vector(B, "conv")
    values = np.convolve(A.values(), B.values(), mode="full")
    if A.is_colvec() and not A.is_rowvec():
        return Col._from_buffer(values)
    if A.n_elem == 1:
        # a scalar-like A: follow B
        return B._new(values, *((values.size, 1) if B.is_colvec() else (1, values.size)))
    return Row._from_buffer(values)


def cross(A: AbstractMat, B: AbstractMat):
    if A.n_elem != 3 or B.n_elem != 3:
        raise DimensionError(
            f"cross: both operands must have 3 elements, got {A.n_elem} and {B.n_elem}."
        )
    return _like(A, np.cross(A.values(), B.values()), A.n_rows, A.n_cols)


def kron(A: AbstractMat, B: AbstractMat) -> Mat:
    return Mat(np.kron(A.to_numpy(), B.to_numpy()))


def shuffle(X: AbstractMat, dim: int = 0):
    """Random permutation of a vector's elements, or of a matrix's rows/columns."""
    from .generation import get_rng

    rng = get_rng()
    if X.is_vec():
        return _like(X, rng.permutation(X.values()), X.n_rows, X.n_cols)
    if dim not in (0, 1):
        raise ValueError(f"dim must be 0 or 1, got {dim!r}.")
    return Mat(rng.permutation(X.to_numpy(), axis=dim))


def unique(X: AbstractMat):
    """Sorted unique elements; a row vector stays a row, anything else gives a Col."""
    values = np.unique(X.values())
    if X.is_rowvec() and not X.is_colvec():
        return Row._from_buffer(values)
    return Col._from_buffer(values)


def vectorise(X: AbstractMat, dim: int = 0):
    """Column (dim 0, column-major) or row (dim 1, row-major) of all elements."""
    if dim == 0:
        return Col._from_buffer(X.values())
    if dim == 1:
        return Row._from_buffer(X.to_numpy().ravel(order="C"))
    raise ValueError(f"dim must be 0 or 1, got {dim!r}.")

