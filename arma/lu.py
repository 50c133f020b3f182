# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import scipy.linalg

from .base import AbstractMat
from .mat import Mat
from .utils import check_not_empty


def _finite(X: AbstractMat, name: str):
    check_not_empty(X, name)
    if not X.is_finite():
        raise ValueError(f"{name}: the matrix must not contain Inf or NaN.")
    return X.to_numpy()


def lu(X: AbstractMat, permute_l: bool = False):
    """
    LU decomposition with partial pivoting (LAPACK getrf via SciPy).

    Parameters
    ----------
    X : AbstractMat
        Any (m, n) matrix.
    permute_l : bool
        If True, fold the row permutation into L and return only (L, U).

    Returns
    -------
    L : Mat
        (m, k) unit lower triangular factor, k = min(m, n). Row-permuted when
        `permute_l` is set, so that X = L @ U.
    U : Mat
        (k, n) upper triangular factor.
    P : Mat
        (m, m) permutation matrix with P @ X = L @ U. Omitted when
        `permute_l` is set.
    """
    A = _finite(X, "lu")
    if permute_l:
        PL, U = scipy.linalg.lu(A, permute_l=True)
        return Mat(PL), Mat(U)
    # SciPy factors X = P L U, so its P is the transpose of ours
    P, L, U = scipy.linalg.lu(A)
    return Mat(L), Mat(U), Mat(P.T)
