# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

from .base import AbstractMat
from .exceptions import ConvergenceError
from .mat import Col, Mat
from .utils import check_not_empty, check_square


def eig_sym(X: AbstractMat, eigenvectors: bool = True):
    """
    Eigen decomposition of a symmetric matrix.

    Only the lower triangle of X is read.

    Parameters
    ----------
    X : AbstractMat
        Real symmetric (n, n) matrix.
    eigenvectors : bool
        If False, return only the eigenvalues.

    Returns
    -------
    eigval : Col
        Eigenvalues in ascending order.
    eigvec : Mat
        Orthonormal eigenvectors in the columns, matching `eigval`.
    """
    check_not_empty(X, "eig_sym")
    check_square(X, "eig_sym")
    A = X.to_numpy()
    try:
        if not eigenvectors:
            return Col._from_buffer(np.linalg.eigvalsh(A))
        w, V = np.linalg.eigh(A)
    except np.linalg.LinAlgError as err:
        raise ConvergenceError(f"eig_sym: {err}", routine="eig_sym") from err
    return Col._from_buffer(w), Mat(V)
