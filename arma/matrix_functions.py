# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import Optional, Tuple

import numpy as np
import scipy.linalg

from .base import AbstractMat
from .exceptions import DimensionError, NotPositiveDefiniteError, SingularMatrixError
from .mat import Mat
from .utils import check_not_empty, check_square, scale_tol

logger = logging.getLogger(__name__)


def chol(X: AbstractMat) -> Mat:
    """
    Cholesky factor R (upper triangular) with X = R.t() @ R.

    Only the upper triangle of X is read.

    Raises
    ------
    NotPositiveDefiniteError
        If X is not positive definite.
    """
    check_not_empty(X, "chol")
    check_square(X, "chol")
    try:
        R = scipy.linalg.cholesky(X.to_numpy(), lower=False)
    except np.linalg.LinAlgError as err:
        raise NotPositiveDefiniteError(
            f"chol: the matrix is not positive definite ({err}).", matrix_name="X"
        ) from err
    return Mat(R)


def inv(X: AbstractMat) -> Mat:
    """Inverse of a square matrix (LAPACK getrf/getri)."""
    check_not_empty(X, "inv")
    check_square(X, "inv")
    try:
        out = np.linalg.inv(X.to_numpy())
    except np.linalg.LinAlgError as err:
        raise SingularMatrixError(
            "inv: the matrix is singular.", matrix_name="X", expected_rank=X.n_rows
        ) from err
    return Mat(out)


def _singular_values(A: np.ndarray) -> np.ndarray:
    return np.linalg.svd(A, compute_uv=False)


def rank(X: AbstractMat, tol: Optional[float] = None) -> int:
    """
    Numerical rank: the number of singular values above `tol`.

    The default tolerance is max(m, n) * s_max * machine epsilon.
    """
    if X.is_empty():
        return 0
    s = _singular_values(X.to_numpy())
    if tol is None:
        tol = scale_tol((X.n_rows, X.n_cols), s[0])
    return int(np.sum(s > tol))


def pinv(X: AbstractMat, tol: Optional[float] = None) -> Mat:
    """
    Moore-Penrose pseudo-inverse via the SVD.

    Singular values at or below `tol` (default as for `rank`) are treated as
    zero.
    """
    if X.is_empty():
        return Mat(X.n_cols, X.n_rows)
    U, s, Vt = np.linalg.svd(X.to_numpy(), full_matrices=False)
    if tol is None:
        tol = scale_tol((X.n_rows, X.n_cols), s[0])
    keep = s > tol
    s_inv = np.zeros_like(s)
    s_inv[keep] = 1.0 / s[keep]
    return Mat((Vt.T * s_inv) @ U.T)


def solve(A: AbstractMat, B: AbstractMat):
    """
    Solve A @ X = B.

    Square systems are solved exactly and raise `SingularMatrixError` when A
    is singular. Non-square systems fall back to the least-squares (or
    minimum norm) solution.
    """
    check_not_empty(A, "solve")
    if A.n_rows != B.n_rows:
        raise DimensionError(
            f"solve: A has {A.n_rows} rows but B has {B.n_rows}."
        )
    a = A.to_numpy()
    b = B.to_numpy()
    if A.is_square():
        try:
            x = np.linalg.solve(a, b)
        except np.linalg.LinAlgError as err:
            raise SingularMatrixError(
                "solve: the system matrix is singular.",
                matrix_name="A",
                expected_rank=A.n_rows,
            ) from err
    else:
        logger.warning(
            "solve(): (%d, %d) system is not square, using least squares",
            A.n_rows,
            A.n_cols,
        )
        x, _res, _rank, _s = np.linalg.lstsq(a, b, rcond=None)
    return B._new(x.ravel(order="F"), *x.shape)


def det(X: AbstractMat) -> float:
    """Determinant of a square matrix (LU based)."""
    check_square(X, "det")
    if X.is_empty():
        return 1.0
    return float(np.linalg.det(X.to_numpy()))


def log_det(X: AbstractMat) -> Tuple[float, float]:
    """
    Log-determinant of a square matrix.

    Returns
    -------
    val : float
        log(|det(X)|), -inf for singular X.
    sign : float
        Sign of det(X): 1, -1 or 0.
    """
    check_square(X, "log_det")
    if X.is_empty():
        return 0.0, 1.0
    sign, val = np.linalg.slogdet(X.to_numpy())
    return float(val), float(sign)
