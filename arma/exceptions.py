# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exception hierarchy for arma.

Every error raised by the package derives from `ArmaError`. Each class also
derives from the closest built-in exception so callers that only know about
`ValueError` / `IndexError` keep working.
"""

from typing import Optional


class ArmaError(Exception):
    """Base exception for all arma errors."""


class DimensionError(ArmaError, ValueError):
    """Operand shapes are incompatible, or a required shape is not met."""


class EmptyMatrixError(DimensionError):
    """The operation needs at least one element but the matrix is empty."""


class OutOfBoundsError(ArmaError, IndexError):
    """A row, column or element index lies outside the matrix."""


class InvalidSpanError(ArmaError, ValueError):
    """A span was built with negative or decreasing positions."""


class UnsupportedOperationError(ArmaError, TypeError):
    """The operator cannot be applied in this form or to this target."""


class InvalidViewError(ArmaError, RuntimeError):
    """
    The view's owner changed shape after the view was created.

    Attributes:
        created_at: owner generation recorded by the view
        current: owner generation at the time of access
    """

    def __init__(self, message: str, created_at: int, current: int):
        super().__init__(message)
        self.created_at = created_at
        self.current = current


class ParseError(ArmaError, ValueError):
    """
    Plain-text matrix data could not be parsed.

    Attributes:
        line_number: 1-based line where parsing failed, if known
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        super().__init__(message)
        self.line_number = line_number


class NumericalError(ArmaError, ArithmeticError):
    """The numerical backend failed to produce a result."""


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or numerically rank-deficient.

    Attributes:
        matrix_name: name of the offending operand
        rank: numerical rank, if computed
        expected_rank: rank the operation required
    """

    def __init__(
        self,
        message: str,
        matrix_name: Optional[str] = None,
        rank: Optional[int] = None,
        expected_rank: Optional[int] = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not (numerically) positive definite.

    Attributes:
        matrix_name: name of the offending operand
    """

    def __init__(self, message: str, matrix_name: Optional[str] = None):
        super().__init__(message)
        self.matrix_name = matrix_name


class ConvergenceError(NumericalError):
    """
    An iterative backend routine did not converge.

    Attributes:
        routine: name of the decomposition that failed
    """

    def __init__(self, message: str, routine: Optional[str] = None):
        super().__init__(message)
        self.routine = routine
