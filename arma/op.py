# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
In-place operator instruction set.

Every matrix and view funnels its in-place arithmetic through `Op.apply`,
so one kernel table serves dense storage and all slicing forms alike.
"""

from enum import Enum
from typing import Optional, Union

import numpy as np

from .exceptions import UnsupportedOperationError

Operand = Union[float, np.ndarray]


class Op(Enum):
    # unary
    INCREMENT = "++"
    DECREMENT = "--"
    NEGATE = "neg"
    # binary
    EQUAL = "="
    PLUS = "+="
    MINUS = "-="
    TIMES = "*="
    ELEMTIMES = "%="
    DIVIDE = "/="
    ELEMDIVIDE = "elem/="

    @property
    def is_unary(self) -> bool:
        return self in _UNARY

    @property
    def is_binary(self) -> bool:
        return self in _BINARY

    def apply(self, lhs: Operand, rhs: Optional[Operand] = None) -> Operand:
        """
        Return `lhs <op> rhs` (or `<op> lhs` for unary operators).

        Division by zero follows IEEE 754 and produces inf / nan.

        Raises
        ------
        UnsupportedOperationError
            A unary operator was given an operand, or a binary one was not.
        """
        if self.is_unary:
            if rhs is not None:
                raise UnsupportedOperationError(
                    f"{self.name} is a unary operator and takes no operand."
                )
            return _UNARY[self](lhs)
        if rhs is None:
            raise UnsupportedOperationError(
                f"{self.name} is a binary operator and needs an operand."
            )
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return _BINARY[self](lhs, rhs)


def _assign(lhs, rhs):
    if np.ndim(lhs) == 0:
        return float(rhs)
    return np.broadcast_to(np.asarray(rhs, dtype=float), np.shape(lhs)).copy()


_UNARY = {
    Op.INCREMENT: lambda x: x + 1.0,
    Op.DECREMENT: lambda x: x - 1.0,
    Op.NEGATE: np.negative,
}

_BINARY = {
    Op.EQUAL: _assign,
    Op.PLUS: np.add,
    Op.MINUS: np.subtract,
    Op.TIMES: np.multiply,
    Op.ELEMTIMES: np.multiply,
    Op.DIVIDE: np.true_divide,
    Op.ELEMDIVIDE: np.true_divide,
}

# Operators whose matrix operand must match the target element for element.
ELEMENTWISE = frozenset({Op.EQUAL, Op.PLUS, Op.MINUS, Op.ELEMTIMES, Op.ELEMDIVIDE})
