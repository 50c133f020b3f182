# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Owning dense containers: `Mat`, `Col` and `Row`.
"""

import logging
from enum import Enum
from typing import Optional

import numpy as np

from . import persistence
from .base import AbstractMat, span_bounds
from .exceptions import DimensionError, OutOfBoundsError
from .op import Op
from .span import Span
from .utils import check_index, check_range

logger = logging.getLogger(__name__)


class Fill(Enum):
    NONE = "none"
    ZEROS = "zeros"
    ONES = "ones"
    EYE = "eye"
    RANDU = "randu"
    RANDN = "randn"


def _as_2d(data) -> np.ndarray:
    """Coerce constructor input into a float64 2-D array (1-D becomes a column)."""
    if isinstance(data, AbstractMat):
        return data.to_numpy()
    arr = np.asarray(data, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1, 1)
    if arr.ndim == 1:
        return arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise DimensionError(f"Expected at most 2 dimensions, got {arr.ndim}.")
    return arr


class Mat(AbstractMat):
    """
    Dense real matrix in column-major storage.

    Constructors
    ------------
    Mat()                                  empty 0x0 matrix
    Mat(n_rows, n_cols, fill=Fill.ZEROS)   sized matrix
    Mat(rows)                              nested sequence, one inner list per row
    Mat(array)                             2-D array (1-D becomes a column)
    Mat(other)                             deep copy of any matrix or view

    Invariant: ``memptr().size == n_elem`` at all times.
    """

    def __init__(self, *args, fill: Fill = Fill.ZEROS):
        self._generation = 0
        if not args:
            self._set(np.zeros(0), 0, 0)
        elif len(args) == 2:
            n_rows, n_cols = args
            self._validate_shape(n_rows, n_cols)
            self._set(np.zeros(n_rows * n_cols), n_rows, n_cols)
            self._fill_with(fill)
        elif len(args) == 1:
            arr = _as_2d(args[0])
            self._set(arr.ravel(order="F").copy(), arr.shape[0], arr.shape[1])
        else:
            raise TypeError(f"{type(self).__name__}() takes at most 2 positional arguments.")

    @classmethod
    def _from_buffer(cls, data: np.ndarray, n_rows: int, n_cols: int) -> "Mat":
        """Wrap an existing column-major buffer without copying."""
        obj = cls.__new__(cls)
        obj._generation = 0
        obj._set(np.asarray(data, dtype=float), n_rows, n_cols)
        return obj

    def _validate_shape(self, n_rows: int, n_cols: int) -> None:
        if n_rows < 0 or n_cols < 0:
            raise DimensionError(f"Invalid shape ({n_rows}, {n_cols}).")

    def _set(self, data: np.ndarray, n_rows: int, n_cols: int) -> None:
        self._validate_shape(n_rows, n_cols)
        if data.size != n_rows * n_cols:
            raise DimensionError(
                f"Buffer of {data.size} elements cannot hold a ({n_rows}, {n_cols})-matrix."
            )
        self._data = data
        self.n_rows = int(n_rows)
        self.n_cols = int(n_cols)

    def _reallocate(self, data: np.ndarray, n_rows: int, n_cols: int) -> None:
        """Replace the buffer; views taken before this call become invalid."""
        self._set(np.asarray(data, dtype=float), n_rows, n_cols)
        self._generation += 1
        logger.debug(
            "%s reallocated to (%d, %d), generation %d",
            type(self).__name__,
            n_rows,
            n_cols,
            self._generation,
        )

    def _assign(self, values: np.ndarray, n_rows: int, n_cols: int) -> None:
        """Take over new contents; only a change of shape reallocates."""
        if (n_rows, n_cols) == (self.n_rows, self.n_cols):
            self._data[:] = values
        else:
            self._reallocate(values, n_rows, n_cols)

    def _fill_with(self, fill: Fill) -> None:
        if fill is Fill.NONE or fill is Fill.ZEROS:
            return
        if fill is Fill.ONES:
            self._data.fill(1.0)
        elif fill is Fill.EYE:
            self._data.fill(0.0)
            self.diag().fill(1.0)
        elif fill is Fill.RANDU:
            AbstractMat.randu(self)
        elif fill is Fill.RANDN:
            AbstractMat.randn(self)
        else:
            raise TypeError(f"Unknown fill type {fill!r}.")

    # storage protocol
    def _storage(self) -> np.ndarray:
        return self._data

    def _index(self) -> slice:
        return slice(0, self.n_elem, 1)

    def _owner(self) -> "Mat":
        return self

    def memptr(self) -> np.ndarray:
        """The live column-major buffer."""
        return self._data

    # ------------------------------------------------------------------
    # in-place specialisations
    # ------------------------------------------------------------------
    def _in_place_scalar(self, op: Op, operand: float) -> None:
        if op is Op.EQUAL:
            # assigning a scalar makes a 1x1 matrix
            self._reallocate(np.array([operand]), 1, 1)
            return
        self._apply(op, operand)

    def _in_place_matrix(self, op: Op, operand: AbstractMat) -> None:
        if op is Op.EQUAL:
            self._assign(operand.values(), operand.n_rows, operand.n_cols)
        elif op is Op.TIMES:
            product = self._product(operand)
            self._assign(product.ravel(order="F"), *product.shape)
        else:
            super()._in_place_matrix(op, operand)

    # ------------------------------------------------------------------
    # shape changes
    # ------------------------------------------------------------------
    def set_size(self, n_rows: int, n_cols: int) -> None:
        """Change the shape; contents are not preserved (new storage is zeroed)."""
        if (n_rows, n_cols) == (self.n_rows, self.n_cols):
            return
        self._validate_shape(n_rows, n_cols)
        self._reallocate(np.zeros(n_rows * n_cols), n_rows, n_cols)

    def copy_size(self, A: AbstractMat) -> None:
        self.set_size(A.n_rows, A.n_cols)

    def reshape(self, n_rows: int, n_cols: int) -> None:
        """
        Change the shape keeping the column-major element order.

        Missing elements are zero, surplus elements are dropped.
        """
        self._validate_shape(n_rows, n_cols)
        data = np.zeros(n_rows * n_cols)
        n = min(data.size, self.n_elem)
        data[:n] = self._data[:n]
        self._reallocate(data, n_rows, n_cols)

    def resize(self, n_rows: int, n_cols: int) -> None:
        """Change the shape keeping each element at its (row, col) position."""
        self._validate_shape(n_rows, n_cols)
        grid = np.zeros((n_rows, n_cols))
        r = min(n_rows, self.n_rows)
        c = min(n_cols, self.n_cols)
        grid[:r, :c] = self.to_numpy()[:r, :c]
        self._reallocate(grid.ravel(order="F"), n_rows, n_cols)

    def reset(self) -> None:
        self._reallocate(np.zeros(0), 0, 0)

    def clear(self) -> None:
        self.reset()

    def swap(self, X: "Mat") -> None:
        """Exchange contents with X in constant time."""
        if not isinstance(X, Mat):
            raise TypeError("swap() needs an owning matrix, not a view.")
        mine = (self._data, self.n_rows, self.n_cols)
        X._validate_shape(self.n_rows, self.n_cols)
        self._validate_shape(X.n_rows, X.n_cols)
        self._reallocate(X._data, X.n_rows, X.n_cols)
        X._reallocate(*mine)

    def insert_rows(self, row_number: int, X, set_to_zero: bool = True) -> None:
        """
        Insert rows before `row_number` (== n_rows appends).

        X is either a matrix with `n_cols` columns or a number of rows to add.
        """
        if row_number < 0 or row_number > self.n_rows:
            raise OutOfBoundsError(f"The row ({row_number}) is out of bounds.")
        if isinstance(X, AbstractMat):
            block = X.to_numpy()
            if self.n_elem and block.shape[1] != self.n_cols:
                raise DimensionError(
                    f"insert_rows: expected {self.n_cols} columns, got {block.shape[1]}."
                )
        else:
            block = np.zeros((int(X), self.n_cols))
            if not set_to_zero:
                block.fill(np.nan)
        current = self.to_numpy() if self.n_elem else np.zeros((self.n_rows, block.shape[1]))
        grid = np.concatenate([current[:row_number], block, current[row_number:]], axis=0)
        self._reallocate(grid.ravel(order="F"), *grid.shape)

    def insert_cols(self, col_number: int, X, set_to_zero: bool = True) -> None:
        """Insert columns before `col_number` (== n_cols appends)."""
        if col_number < 0 or col_number > self.n_cols:
            raise OutOfBoundsError(f"The column ({col_number}) is out of bounds.")
        if isinstance(X, AbstractMat):
            block = X.to_numpy()
            if self.n_elem and block.shape[0] != self.n_rows:
                raise DimensionError(
                    f"insert_cols: expected {self.n_rows} rows, got {block.shape[0]}."
                )
        else:
            block = np.zeros((self.n_rows, int(X)))
            if not set_to_zero:
                block.fill(np.nan)
        current = self.to_numpy() if self.n_elem else np.zeros((block.shape[0], self.n_cols))
        grid = np.concatenate([current[:, :col_number], block, current[:, col_number:]], axis=1)
        self._reallocate(grid.ravel(order="F"), *grid.shape)

    def shed_row(self, row_number: int) -> None:
        self.shed_rows(row_number, row_number)

    def shed_rows(self, first_row: int, last_row: int) -> None:
        check_range(first_row, last_row, self.n_rows, "row")
        grid = np.delete(self.to_numpy(), np.s_[first_row : last_row + 1], axis=0)
        self._reallocate(grid.ravel(order="F"), *grid.shape)

    def shed_col(self, col_number: int) -> None:
        self.shed_cols(col_number, col_number)

    def shed_cols(self, first_col: int, last_col: int) -> None:
        check_range(first_col, last_col, self.n_cols, "column")
        grid = np.delete(self.to_numpy(), np.s_[first_col : last_col + 1], axis=1)
        self._reallocate(grid.ravel(order="F"), *grid.shape)

    # ------------------------------------------------------------------
    # sized fills
    # ------------------------------------------------------------------
    def zeros(self, n_rows: Optional[int] = None, n_cols: Optional[int] = None):
        if n_rows is not None:
            self.set_size(n_rows, n_cols)
        return super().zeros()

    def ones(self, n_rows: Optional[int] = None, n_cols: Optional[int] = None):
        if n_rows is not None:
            self.set_size(n_rows, n_cols)
        return super().ones()

    def randu(self, n_rows: Optional[int] = None, n_cols: Optional[int] = None):
        if n_rows is not None:
            self.set_size(n_rows, n_cols)
        return super().randu()

    def randn(self, n_rows: Optional[int] = None, n_cols: Optional[int] = None):
        if n_rows is not None:
            self.set_size(n_rows, n_cols)
        return super().randn()

    def eye(self, n_rows: Optional[int] = None, n_cols: Optional[int] = None):
        if n_rows is not None:
            self.set_size(n_rows, n_cols)
        self._data.fill(0.0)
        self.diag().fill(1.0)
        return self

    # ------------------------------------------------------------------
    # linear algebra shortcuts
    # ------------------------------------------------------------------
    def i(self) -> "Mat":
        """Inverse of a square matrix."""
        from .matrix_functions import inv

        return inv(self)

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------
    def load(self, source) -> bool:
        """
        Replace the contents with matrix data read from a path or text stream.

        Returns False (and leaves the matrix empty) when the source holds no
        data; raises ParseError on malformed input.
        """
        loaded = persistence.load(source)
        self._reallocate(loaded._data, loaded.n_rows, loaded.n_cols)
        return not loaded.is_empty()

    def quiet_load(self, source) -> bool:
        """Like `load` but reports failure by returning False."""
        try:
            return self.load(source)
        except (OSError, ValueError) as err:
            logger.warning("quiet_load(%r) failed: %s", source, err)
            self.reset()
            return False


class AbstractVector(Mat):
    """Shared behaviour of `Col` and `Row`: one-argument sizing and sub-vectors."""

    def _shape_for(self, n_elem: int):
        raise NotImplementedError

    def __init__(self, *args, fill: Fill = Fill.ZEROS):
        self._generation = 0
        if not args:
            self._set(np.zeros(0), *self._shape_for(0))
        elif len(args) == 1 and isinstance(args[0], (int, np.integer)):
            n = int(args[0])
            self._validate_shape(*self._shape_for(n))
            self._set(np.zeros(n), *self._shape_for(n))
            self._fill_with(fill)
        elif len(args) == 1:
            source = args[0]
            if isinstance(source, AbstractMat):
                if not (source.is_vec() or source.is_empty()):
                    raise DimensionError(
                        f"{type(self).__name__} needs a vector, got a "
                        f"({source.n_rows}, {source.n_cols})-matrix."
                    )
                values = source.values()
            else:
                arr = np.asarray(source, dtype=float)
                if arr.ndim == 2 and 1 not in arr.shape and arr.size:
                    raise DimensionError(
                        f"{type(self).__name__} needs a vector, got shape {arr.shape}."
                    )
                values = arr.ravel(order="F").copy()
            self._set(values, *self._shape_for(values.size))
        else:
            raise TypeError(f"{type(self).__name__}() takes at most 1 positional argument.")

    @classmethod
    def _from_buffer(cls, data: np.ndarray, n_rows: int = None, n_cols: int = None):
        obj = cls.__new__(cls)
        obj._generation = 0
        data = np.asarray(data, dtype=float)
        obj._set(data, *obj._shape_for(data.size))
        return obj

    def set_size(self, n_elem: int, n_cols: Optional[int] = None) -> None:
        shape = self._shape_for(n_elem) if n_cols is None else (n_elem, n_cols)
        Mat.set_size(self, *shape)

    def reshape(self, n_elem: int, n_cols: Optional[int] = None) -> None:
        shape = self._shape_for(n_elem) if n_cols is None else (n_elem, n_cols)
        Mat.reshape(self, *shape)

    def resize(self, n_elem: int, n_cols: Optional[int] = None) -> None:
        shape = self._shape_for(n_elem) if n_cols is None else (n_elem, n_cols)
        Mat.resize(self, *shape)

    def reset(self) -> None:
        self._reallocate(np.zeros(0), *self._shape_for(0))

    def zeros(self, n_elem: Optional[int] = None, n_cols: Optional[int] = None):
        if n_elem is not None:
            self.set_size(n_elem, n_cols)
        return AbstractMat.zeros(self)

    def ones(self, n_elem: Optional[int] = None, n_cols: Optional[int] = None):
        if n_elem is not None:
            self.set_size(n_elem, n_cols)
        return AbstractMat.ones(self)

    def randu(self, n_elem: Optional[int] = None, n_cols: Optional[int] = None):
        if n_elem is not None:
            self.set_size(n_elem, n_cols)
        return AbstractMat.randu(self)

    def randn(self, n_elem: Optional[int] = None, n_cols: Optional[int] = None):
        if n_elem is not None:
            self.set_size(n_elem, n_cols)
        return AbstractMat.randn(self)

    def _in_place_matrix(self, op: Op, operand: AbstractMat) -> None:
        if op is Op.EQUAL and (operand.is_vec() or operand.is_empty()):
            values = operand.values()
            self._assign(values, *self._shape_for(values.size))
            return
        super()._in_place_matrix(op, operand)

    def _subvec_view(self, first: int, last: int):
        raise NotImplementedError

    def subvec(self, first, last: Optional[int] = None):
        """View of elements `first..last` (inclusive), or of a Span."""
        if isinstance(first, Span):
            first, last = span_bounds(first, self.n_elem, "element index")
        else:
            check_range(first, last, self.n_elem, "element index")
        return self._subvec_view(first, last)

    def head(self, n: int):
        check_index(n - 1, self.n_elem, "element count")
        return self._subvec_view(0, n - 1)

    def tail(self, n: int):
        check_index(n - 1, self.n_elem, "element count")
        return self._subvec_view(self.n_elem - n, self.n_elem - 1)


class Col(AbstractVector):
    """Column vector: `n_cols == 1` always."""

    _result_kind = "col"

    def _shape_for(self, n_elem: int):
        return n_elem, 1

    def _validate_shape(self, n_rows: int, n_cols: int) -> None:
        super()._validate_shape(n_rows, n_cols)
        if n_cols != 1:
            raise DimensionError(f"A Col must have exactly one column, got {n_cols}.")

    def _subvec_view(self, first: int, last: int):
        from .views import ViewSubCol

        return ViewSubCol(self, 0, first, last)


class Row(AbstractVector):
    """Row vector: `n_rows == 1` always."""

    _result_kind = "row"

    def _shape_for(self, n_elem: int):
        return 1, n_elem

    def _validate_shape(self, n_rows: int, n_cols: int) -> None:
        super()._validate_shape(n_rows, n_cols)
        if n_rows != 1:
            raise DimensionError(f"A Row must have exactly one row, got {n_rows}.")

    def _subvec_view(self, first: int, last: int):
        from .views import ViewSubRow

        return ViewSubRow(self, 0, first, last)
