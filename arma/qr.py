# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .base import AbstractMat
from .exceptions import ConvergenceError
from .mat import Mat
from .utils import check_not_empty


def _qr(X: AbstractMat, mode: str, name: str) -> Tuple[Mat, Mat]:
    check_not_empty(X, name)
    try:
        Q, R = np.linalg.qr(X.to_numpy(), mode=mode)
    except np.linalg.LinAlgError as err:
        raise ConvergenceError(f"{name}: {err}", routine=name) from err
    return Mat(Q), Mat(R)


def qr(X: AbstractMat) -> Tuple[Mat, Mat]:
    """
    Complete QR decomposition (Householder, LAPACK geqrf).

    Returns
    -------
    Q : Mat
        (m, m) orthogonal matrix.
    R : Mat
        (m, n) upper triangular matrix with X = Q @ R.
    """
    return _qr(X, "complete", "qr")


def qr_econ(X: AbstractMat) -> Tuple[Mat, Mat]:
    """
    Economical QR decomposition.

    For m > n only the first n columns of Q and the first n rows of R are
    returned: Q is (m, k), R is (k, n) with k = min(m, n).
    """
    return _qr(X, "reduced", "qr_econ")
