# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from .exceptions import DimensionError, EmptyMatrixError, OutOfBoundsError

EPS: float = 1e-12

# Output formatting
PRINT_PRECISION: int = 4
SAVE_WIDTH: int = 24
SAVE_PRECISION: int = 16

HIST_BINS: int = 10


def scale_tol(shape, s_max: float) -> float:
    """Return the rank tolerance max(m, n) * s_max * machine epsilon."""
    return max(shape) * s_max * np.finfo(float).eps


def check_index(i: int, bound: int, what: str = "index") -> int:
    """Return `i` as an int if 0 <= i < bound, else raise OutOfBoundsError."""
    if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)):
        raise TypeError(f"The {what} must be an integer, got {type(i).__name__}.")
    if i < 0 or i >= bound:
        raise OutOfBoundsError(f"The {what} ({i}) is out of bounds [0, {bound}).")
    return int(i)


def check_range(first: int, last: int, bound: int, what: str = "index") -> None:
    """Validate an inclusive range [first, last] inside [0, bound)."""
    if last < first:
        raise OutOfBoundsError(
            f"The first {what} ({first}) must not exceed the last {what} ({last})."
        )
    check_index(first, bound, f"first {what}")
    check_index(last, bound, f"last {what}")


def to_index_array(indices, bound: int, what: str = "index") -> np.ndarray:
    """
    Convert a vector of indices into an integer array and bounds-check it.

    `indices` may be any arma matrix, a NumPy array or a Python sequence.
    Floating point entries must hold integral values.
    """
    if hasattr(indices, "n_elem"):
        if not (indices.is_vec() or indices.is_empty()):
            raise DimensionError(
                f"The {what} selection must be a vector, got a "
                f"({indices.n_rows}, {indices.n_cols})-matrix."
            )
        raw = indices.values()
    else:
        raw = np.asarray(indices)
        if raw.ndim > 1:
            raw = raw.ravel(order="F")
    if raw.size == 0:
        return np.zeros(0, dtype=np.intp)
    if raw.dtype.kind == "f":
        if not np.all(np.isfinite(raw)) or np.any(raw != np.floor(raw)):
            raise OutOfBoundsError(f"Each {what} must be a non-negative integer.")
    elif raw.dtype.kind not in "iu":
        raise TypeError(f"Unsupported {what} dtype {raw.dtype}.")
    idx = raw.astype(np.intp)
    if idx.min() < 0 or idx.max() >= bound:
        raise OutOfBoundsError(
            f"The {what} selection [{idx.min()}, {idx.max()}] is out of bounds [0, {bound})."
        )
    return idx


def check_same_shape(a, b, operation: str) -> None:
    if a.n_rows != b.n_rows or a.n_cols != b.n_cols:
        raise DimensionError(
            f"{operation}: both operands must have the same shape, got "
            f"({a.n_rows}, {a.n_cols}) and ({b.n_rows}, {b.n_cols})."
        )


def check_not_empty(X, name: str = "X") -> None:
    if X.n_elem == 0:
        raise EmptyMatrixError(f"{name}: the matrix must have at least one element.")


def check_square(X, name: str = "X") -> None:
    if X.n_rows != X.n_cols:
        raise DimensionError(
            f"{name}: the matrix must be square, got ({X.n_rows}, {X.n_cols})."
        )


def check_vector(X, name: str = "X") -> None:
    if not X.is_vec():
        raise DimensionError(
            f"{name}: expected a vector, got a ({X.n_rows}, {X.n_cols})-matrix."
        )
