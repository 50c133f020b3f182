# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Element-wise functions.

Each function accepts any matrix or view and returns a new container of the
same kind (`Col` stays `Col`, views materialise). Domain errors follow
IEEE 754: log(0) is -inf, sqrt(-1) is nan, nothing raises.
"""

import numpy as np

from .base import AbstractMat

_MAX = np.finfo(float).max
_MIN_NORMAL = np.finfo(float).tiny


def _map(X: AbstractMat, fn, *args):
    with np.errstate(all="ignore"):
        values = fn(X.values(), *args)
    return X._new(np.asarray(values, dtype=float), X.n_rows, X.n_cols)


def abs(X):
    return _map(X, np.abs)


def eps(X):
    """Distance from each |x| to the next larger representable double."""
    return _map(X, lambda v: np.spacing(np.abs(v)))


def exp(X):
    return _map(X, np.exp)


def exp2(X):
    return _map(X, np.exp2)


def exp10(X):
    return _map(X, lambda v: np.power(10.0, v))


def trunc_exp(X):
    """exp(x), capped at the largest finite double instead of overflowing."""
    return _map(X, lambda v: np.where(v >= np.log(_MAX), _MAX, np.exp(v)))


def log(X):
    return _map(X, np.log)


def log2(X):
    return _map(X, np.log2)


def log10(X):
    return _map(X, np.log10)


def trunc_log(X):
    """
    log(x) that never returns infinities.

    inf maps to log(max double); x <= 0 maps to log(min normal double).
    """

    def _trunc(v):
        out = np.log(np.where(v <= 0, _MIN_NORMAL, v))
        return np.where(np.isposinf(v), np.log(_MAX), out)

    return _map(X, _trunc)


def pow(X, p: float):
    return _map(X, np.power, float(p))


def sqrt(X):
    return _map(X, np.sqrt)


def square(X):
    return _map(X, np.square)


def floor(X):
    return _map(X, np.floor)


def ceil(X):
    return _map(X, np.ceil)


def round(X):
    """Round half away from zero (np.round rounds half to even)."""
    return _map(X, lambda v: np.sign(v) * np.floor(np.abs(v) + 0.5))


def sign(X):
    return _map(X, np.sign)


def sin(X):
    return _map(X, np.sin)


def asin(X):
    return _map(X, np.arcsin)


def sinh(X):
    return _map(X, np.sinh)


def asinh(X):
    return _map(X, np.arcsinh)


def cos(X):
    return _map(X, np.cos)


def acos(X):
    return _map(X, np.arccos)


def cosh(X):
    return _map(X, np.cosh)


def acosh(X):
    return _map(X, np.arccosh)


def tan(X):
    return _map(X, np.tan)


def atan(X):
    return _map(X, np.arctan)


def tanh(X):
    return _map(X, np.tanh)


def atanh(X):
    return _map(X, np.arctanh)
