# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from .base import AbstractMat
from .exceptions import ConvergenceError
from .mat import Col, Mat
from .utils import check_not_empty


def _svd(X: AbstractMat, full: bool, compute_uv: bool, name: str):
    check_not_empty(X, name)
    try:
        out = np.linalg.svd(X.to_numpy(), full_matrices=full, compute_uv=compute_uv)
    except np.linalg.LinAlgError as err:
        raise ConvergenceError(f"{name}: {err}", routine=name) from err
    if not compute_uv:
        return Col._from_buffer(out)
    U, s, Vt = out
    return Mat(U), Col._from_buffer(s), Mat(Vt.T)


def svd(X: AbstractMat, compute_uv: bool = True):
    """
    Singular value decomposition X = U @ diagmat(s) @ V.t().

    Parameters
    ----------
    X : AbstractMat
        Any (m, n) matrix.
    compute_uv : bool
        If False, return only the singular values.

    Returns
    -------
    U : Mat
        (m, m) left singular vectors.
    s : Col
        min(m, n) singular values in descending order.
    V : Mat
        (n, n) right singular vectors (V, not V transposed).
    """
    return _svd(X, True, compute_uv, "svd")


def svd_econ(X: AbstractMat):
    """Economical SVD: U is (m, k) and V is (n, k) with k = min(m, n)."""
    return _svd(X, False, True, "svd_econ")
