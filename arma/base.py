# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Behaviour shared by owning matrices and the views over them.

Storage is a flat float64 buffer in column-major order. Every object exposes
an addressing rule (`_index`) that maps its logical column-major positions to
physical offsets in the owner's buffer: a slice for contiguous or strided
layouts, an integer array for index selections. All element access, iteration
and in-place arithmetic is written once against that rule.
"""

import logging
from typing import Iterator, Optional, Union

import numpy as np

from . import persistence
from .exceptions import DimensionError, OutOfBoundsError, UnsupportedOperationError
from .op import ELEMENTWISE, Op
from .span import Size, Span
from .utils import (
    check_index,
    check_not_empty,
    check_range,
    check_same_shape,
    to_index_array,
)

logger = logging.getLogger(__name__)

Index = Union[slice, np.ndarray]


def _is_int(x) -> bool:
    return isinstance(x, (int, np.integer)) and not isinstance(x, (bool, np.bool_))


def _as_span(key) -> Span:
    if isinstance(key, Span):
        return key
    if isinstance(key, slice):
        return Span.from_slice(key)
    if _is_int(key):
        return Span(key)
    raise TypeError(f"Cannot build a span from {type(key).__name__}.")


def span_bounds(span: Optional[Span], n: int, what: str):
    """Inclusive (first, last) bounds of `span` within a dimension of length n."""
    if span is None or span.is_entire_range:
        return 0, n - 1
    first, last = span.resolve(n)
    check_range(first, last, n, what)
    return first, last


def slice_offsets(s: slice) -> np.ndarray:
    return np.arange(s.start, s.stop, s.step, dtype=np.intp)


class AbstractMat:
    """
    Base class of `Mat`, `Col`, `Row` and every view.

    Subclasses provide `n_rows`, `n_cols` and the storage protocol:
    `_storage()` (owning buffer), `_index()` (addressing rule) and
    `_owner()` (owning Mat).
    """

    n_rows: int = 0
    n_cols: int = 0

    # out-of-place results become "mat", "col" or "row" containers
    _result_kind = "mat"

    # numpy must defer to our reflected operators
    __array_ufunc__ = None

    # ------------------------------------------------------------------
    # storage protocol
    # ------------------------------------------------------------------
    def _storage(self) -> np.ndarray:
        raise NotImplementedError

    def _index(self) -> Index:
        raise NotImplementedError

    def _owner(self):
        raise NotImplementedError

    def _has_duplicates(self) -> bool:
        return False

    def _offsets(self) -> np.ndarray:
        """Physical offsets of all elements in logical column-major order."""
        idx = self._index()
        if isinstance(idx, slice):
            return slice_offsets(idx)
        return idx

    def _physical(self, n: int) -> int:
        idx = self._index()
        if isinstance(idx, slice):
            return idx.start + n * idx.step
        return int(idx[n])

    def _linear(self, i: int, j: Optional[int] = None) -> int:
        if j is None:
            return check_index(i, self.n_elem, "element index")
        check_index(i, self.n_rows, "row")
        check_index(j, self.n_cols, "column")
        return i + j * self.n_rows

    @property
    def n_elem(self) -> int:
        return self.n_rows * self.n_cols

    # ------------------------------------------------------------------
    # element access
    # ------------------------------------------------------------------
    def at(self, i: int, j: Optional[int] = None) -> float:
        """Element at linear position i, or at row i / column j."""
        n = self._linear(i, j)
        return float(self._storage()[self._physical(n)])

    def values(self) -> np.ndarray:
        """Copy of all elements as a 1-D array in column-major order."""
        return np.array(self._storage()[self._index()], dtype=float)

    def to_numpy(self) -> np.ndarray:
        """Copy of the elements as an (n_rows, n_cols) array."""
        return self.values().reshape((self.n_rows, self.n_cols), order="F")

    def __array__(self, dtype=None, copy=None):
        out = self.to_numpy()
        return out if dtype is None else out.astype(dtype)

    def __iter__(self) -> Iterator[float]:
        storage = self._storage()
        for offset in self._offsets():
            yield float(storage[offset])

    def __len__(self) -> int:
        return self.n_elem

    def __getitem__(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError("Matrices are indexed by (row, column).")
            r, c = key
            if _is_int(r) and _is_int(c):
                return self.at(r, c)
            return self.submat(_as_span(r), _as_span(c))
        if _is_int(key):
            return self.at(key)
        raise TypeError(f"Invalid index type {type(key).__name__}.")

    def __setitem__(self, key, value):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError("Matrices are indexed by (row, column).")
            r, c = key
            if _is_int(r) and _is_int(c):
                n = self._linear(r, c)
            else:
                self.submat(_as_span(r), _as_span(c)).in_place(Op.EQUAL, value)
                return
        elif _is_int(key):
            n = self._linear(key)
        else:
            raise TypeError(f"Invalid index type {type(key).__name__}.")
        self._storage()[self._physical(n)] = float(value)

    # ------------------------------------------------------------------
    # views
    # ------------------------------------------------------------------
    def col(self, col_number: int, rows: Optional[Span] = None):
        """View of column `col_number`, optionally restricted to a row span."""
        from .views import ViewSubCol

        check_index(col_number, self.n_cols, "column")
        first, last = span_bounds(rows, self.n_rows, "row")
        return ViewSubCol(self, col_number, first, last)

    def row(self, row_number: int, cols: Optional[Span] = None):
        """View of row `row_number`, optionally restricted to a column span."""
        from .views import ViewSubRow

        check_index(row_number, self.n_rows, "row")
        first, last = span_bounds(cols, self.n_cols, "column")
        return ViewSubRow(self, row_number, first, last)

    def cols(self, first_or_indices, last_col: Optional[int] = None):
        """View of columns `first..last` (inclusive) or of an index vector."""
        from .views import ViewElemSubMat, ViewSubMat

        if last_col is None:
            idx = to_index_array(first_or_indices, self.n_cols, "column")
            return ViewElemSubMat(self, None, idx)
        check_range(first_or_indices, last_col, self.n_cols, "column")
        return ViewSubMat(self, 0, first_or_indices, self.n_rows - 1, last_col)

    def rows(self, first_or_indices, last_row: Optional[int] = None):
        """View of rows `first..last` (inclusive) or of an index vector."""
        from .views import ViewElemSubMat, ViewSubMat

        if last_row is None:
            idx = to_index_array(first_or_indices, self.n_rows, "row")
            return ViewElemSubMat(self, idx, None)
        check_range(first_or_indices, last_row, self.n_rows, "row")
        return ViewSubMat(self, first_or_indices, 0, last_row, self.n_cols - 1)

    def submat(self, *args):
        """
        View of a sub-matrix.

        Accepted forms
        --------------
        submat(first_row, first_col, last_row, last_col)
        submat(first_row, first_col, Size(n_rows, n_cols))
        submat(row_span, col_span)
        submat(row_indices, col_indices)
        """
        from .views import ViewElemSubMat, ViewSubMat

        if len(args) == 4:
            first_row, first_col, last_row, last_col = args
        elif len(args) == 3 and isinstance(args[2], tuple):
            first_row, first_col = args[0], args[1]
            size = Size(*args[2])
            if size.n_rows < 1 or size.n_cols < 1:
                raise OutOfBoundsError(f"The size {tuple(size)} must be positive.")
            last_row = first_row + size.n_rows - 1
            last_col = first_col + size.n_cols - 1
        elif len(args) == 2 and all(isinstance(a, Span) for a in args):
            first_row, last_row = span_bounds(args[0], self.n_rows, "row")
            first_col, last_col = span_bounds(args[1], self.n_cols, "column")
            return ViewSubMat(self, first_row, first_col, last_row, last_col)
        elif len(args) == 2 and any(isinstance(a, Span) for a in args):
            raise TypeError(
                "submat() takes two spans or two index vectors, not a mix of both."
            )
        elif len(args) == 2:
            rows = to_index_array(args[0], self.n_rows, "row")
            cols = to_index_array(args[1], self.n_cols, "column")
            return ViewElemSubMat(self, rows, cols)
        else:
            raise TypeError(f"submat() got an unsupported argument list {args!r}.")

        check_range(first_row, last_row, self.n_rows, "row")
        check_range(first_col, last_col, self.n_cols, "column")
        return ViewSubMat(self, first_row, first_col, last_row, last_col)

    def elem(self, indices):
        """Column-vector view of the elements at the given linear indices."""
        from .views import ViewElem

        return ViewElem(self, to_index_array(indices, self.n_elem, "element index"))

    def diag(self, k: int = 0):
        """View of the k-th diagonal (k > 0 above, k < 0 below the main one)."""
        from .views import ViewDiag

        if k > 0:
            check_index(k, self.n_cols, "super-diagonal")
        elif k < 0:
            check_index(-k, self.n_rows, "sub-diagonal")
        return ViewDiag(self, k)

    # ------------------------------------------------------------------
    # in-place dispatch
    # ------------------------------------------------------------------
    def in_place(self, op: Op, operand=None):
        """
        Apply `op` to every element, in place.

        Parameters
        ----------
        op : Op
            Unary (`INCREMENT`, `DECREMENT`, `NEGATE`) or binary operator.
        operand : float | AbstractMat | None
            Right-hand side for binary operators. Matrix operands must have
            the target's shape, except for `TIMES` which forms the matrix
            product.

        Returns
        -------
        self, so calls can be chained.
        """
        if not isinstance(op, Op):
            raise TypeError(f"Expected an Op, got {type(op).__name__}.")
        if op.is_unary:
            if operand is not None:
                raise UnsupportedOperationError(
                    f"{op.name} is a unary operator and takes no operand."
                )
            self._apply(op)
        elif operand is None:
            raise UnsupportedOperationError(
                f"{op.name} is a binary operator and needs an operand."
            )
        elif isinstance(operand, AbstractMat):
            self._in_place_matrix(op, operand)
        else:
            self._in_place_scalar(op, float(operand))
        return self

    def _in_place_scalar(self, op: Op, operand: float) -> None:
        # on a view, assigning a scalar fills it
        self._apply(op, operand)

    def _in_place_matrix(self, op: Op, operand: "AbstractMat") -> None:
        if op in ELEMENTWISE:
            check_same_shape(self, operand, op.name)
            self._apply(op, operand.values())
        elif op is Op.TIMES:
            product = self._product(operand)
            if product.shape != (self.n_rows, self.n_cols):
                raise DimensionError(
                    f"TIMES: the product has shape {product.shape} but the target is "
                    f"({self.n_rows}, {self.n_cols})."
                )
            self._apply(Op.EQUAL, product.ravel(order="F"))
        else:
            raise UnsupportedOperationError(
                f"{op.name} does not accept a matrix operand."
            )

    def _product(self, operand: "AbstractMat") -> np.ndarray:
        if self.n_cols != operand.n_rows:
            raise DimensionError(
                f"Matrix product of ({self.n_rows}, {self.n_cols}) and "
                f"({operand.n_rows}, {operand.n_cols}) is undefined."
            )
        return self.to_numpy() @ operand.to_numpy()

    def _apply(self, op: Op, rhs=None) -> None:
        """
        Kernel behind every in-place operation.

        `rhs` is None (unary), a float or a 1-D array aligned with this
        object's logical element order. It is always a copy, so aliased
        operands behave as if read before the first write.
        """
        storage = self._storage()
        if self._has_duplicates():
            # repeated offsets: one application per occurrence, in order
            per_element = rhs is not None and np.ndim(rhs) == 1
            for n, offset in enumerate(self._offsets()):
                r = rhs[n] if per_element else rhs
                storage[offset] = op.apply(storage[offset], r)
            return
        idx = self._index()
        storage[idx] = op.apply(storage[idx], rhs)

    def __iadd__(self, other):
        return self.in_place(Op.PLUS, other)

    def __isub__(self, other):
        return self.in_place(Op.MINUS, other)

    def __imul__(self, other):
        if isinstance(other, AbstractMat):
            return self.in_place(Op.ELEMTIMES, other)
        return self.in_place(Op.TIMES, other)

    def __itruediv__(self, other):
        if isinstance(other, AbstractMat):
            return self.in_place(Op.ELEMDIVIDE, other)
        return self.in_place(Op.DIVIDE, other)

    def __imatmul__(self, other):
        if not isinstance(other, AbstractMat):
            return NotImplemented
        return self.in_place(Op.TIMES, other)

    # ------------------------------------------------------------------
    # fills
    # ------------------------------------------------------------------
    def fill(self, value: float):
        self._apply(Op.EQUAL, float(value))
        return self

    def zeros(self):
        return self.fill(0.0)

    def ones(self):
        return self.fill(1.0)

    def randu(self):
        """Fill with uniform samples from [0, 1)."""
        from .generation import get_rng

        self._apply(Op.EQUAL, get_rng().random(self.n_elem))
        return self

    def randn(self):
        """Fill with standard normal samples."""
        from .generation import get_rng

        self._apply(Op.EQUAL, get_rng().standard_normal(self.n_elem))
        return self

    def imbue(self, fn):
        """Fill by calling `fn()` once per element, in column-major order."""
        self._apply(Op.EQUAL, np.array([fn() for _ in range(self.n_elem)], dtype=float))
        return self

    def transform(self, fn):
        """Replace every element x by fn(x)."""
        current = self.values()
        self._apply(Op.EQUAL, np.array([fn(x) for x in current], dtype=float))
        return self

    # ------------------------------------------------------------------
    # out-of-place arithmetic
    # ------------------------------------------------------------------
    def _new(self, values: np.ndarray, n_rows: int, n_cols: int, kind: Optional[str] = None):
        from .mat import Col, Mat, Row

        kind = kind or self._result_kind
        if kind == "col" and n_cols == 1:
            return Col._from_buffer(values)
        if kind == "row" and n_rows == 1:
            return Row._from_buffer(values)
        return Mat._from_buffer(values, n_rows, n_cols)

    def copy(self):
        """Deep copy as an owning container."""
        return self._new(self.values(), self.n_rows, self.n_cols)

    def _binary(self, op: Op, operand, name: str):
        if isinstance(operand, AbstractMat):
            check_same_shape(self, operand, name)
            rhs = operand.values()
        else:
            rhs = float(operand)
        return self._new(op.apply(self.values(), rhs), self.n_rows, self.n_cols)

    def plus(self, X):
        return self._binary(Op.PLUS, X, "plus")

    def minus(self, X):
        return self._binary(Op.MINUS, X, "minus")

    def elem_times(self, X):
        return self._binary(Op.ELEMTIMES, X, "elem_times")

    def elem_divide(self, X):
        return self._binary(Op.ELEMDIVIDE, X, "elem_divide")

    def divide(self, x: float):
        if isinstance(x, AbstractMat):
            raise UnsupportedOperationError("divide() takes a scalar; use elem_divide().")
        return self._binary(Op.DIVIDE, x, "divide")

    def times(self, X):
        """Matrix product with X, or scaling when X is a scalar."""
        if not isinstance(X, AbstractMat):
            return self._binary(Op.TIMES, X, "times")
        product = self._product(X)
        return self._new(product.ravel(order="F"), *product.shape, kind="mat")

    def __add__(self, other):
        return self.plus(other)

    def __radd__(self, other):
        return self.plus(other)

    def __sub__(self, other):
        return self.minus(other)

    def __rsub__(self, other):
        return self._new(float(other) - self.values(), self.n_rows, self.n_cols)

    def __mul__(self, other):
        if isinstance(other, AbstractMat):
            return self.elem_times(other)
        return self.times(other)

    def __rmul__(self, other):
        return self.times(other)

    def __truediv__(self, other):
        if isinstance(other, AbstractMat):
            return self.elem_divide(other)
        return self.divide(other)

    def __rtruediv__(self, other):
        with np.errstate(divide="ignore", invalid="ignore"):
            values = float(other) / self.values()
        return self._new(values, self.n_rows, self.n_cols)

    def __matmul__(self, other):
        if not isinstance(other, AbstractMat):
            return NotImplemented
        return self.times(other)

    def __neg__(self):
        return self._new(Op.NEGATE.apply(self.values()), self.n_rows, self.n_cols)

    def __pos__(self):
        return self.copy()

    # ------------------------------------------------------------------
    # relational operators, 0/1 results
    # ------------------------------------------------------------------
    def _compare(self, fn, operand, name: str):
        if isinstance(operand, AbstractMat):
            check_same_shape(self, operand, name)
            rhs = operand.values()
        else:
            rhs = float(operand)
        return self._new(fn(self.values(), rhs).astype(float), self.n_rows, self.n_cols)

    def equals(self, X):
        return self._compare(np.equal, X, "equals")

    def non_equals(self, X):
        return self._compare(np.not_equal, X, "non_equals")

    def less_than(self, X):
        return self._compare(np.less_equal, X, "less_than")

    def strict_less_than(self, X):
        return self._compare(np.less, X, "strict_less_than")

    def greater_than(self, X):
        return self._compare(np.greater_equal, X, "greater_than")

    def strict_greater_than(self, X):
        return self._compare(np.greater, X, "strict_greater_than")

    def __lt__(self, other):
        return self.strict_less_than(other)

    def __le__(self, other):
        return self.less_than(other)

    def __gt__(self, other):
        return self.strict_greater_than(other)

    def __ge__(self, other):
        return self.greater_than(other)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def is_empty(self) -> bool:
        return self.n_elem == 0

    empty = is_empty

    def size(self) -> int:
        return self.n_elem

    def is_vec(self) -> bool:
        return self.is_colvec() or self.is_rowvec()

    def is_colvec(self) -> bool:
        return self.n_cols == 1

    def is_rowvec(self) -> bool:
        return self.n_rows == 1

    def is_square(self) -> bool:
        return self.n_rows == self.n_cols

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.values())))

    def in_range(self, *args) -> bool:
        """
        Whether a position or range lies inside the matrix.

        in_range(n), in_range(i, j), in_range(span), in_range(row_span, col_span),
        in_range(first_row, first_col, Size(n_rows, n_cols))
        """
        if len(args) == 1 and isinstance(args[0], Span):
            first, last = args[0].resolve(self.n_elem)
            return 0 <= first <= last < self.n_elem
        if len(args) == 1:
            return 0 <= args[0] < self.n_elem
        if len(args) == 2 and all(isinstance(a, Span) for a in args):
            r0, r1 = args[0].resolve(self.n_rows)
            c0, c1 = args[1].resolve(self.n_cols)
            return 0 <= r0 <= r1 < self.n_rows and 0 <= c0 <= c1 < self.n_cols
        if len(args) == 2:
            i, j = args
            return 0 <= i < self.n_rows and 0 <= j < self.n_cols
        if len(args) == 3:
            i, j, size = args[0], args[1], Size(*args[2])
            return (
                0 <= i
                and 0 <= j
                and size.n_rows > 0
                and size.n_cols > 0
                and i + size.n_rows <= self.n_rows
                and j + size.n_cols <= self.n_cols
            )
        raise TypeError(f"in_range() got an unsupported argument list {args!r}.")

    def min(self) -> float:
        check_not_empty(self)
        return float(np.min(self.values()))

    def max(self) -> float:
        check_not_empty(self)
        return float(np.max(self.values()))

    def index_min(self) -> int:
        """Linear (column-major) index of the smallest element."""
        check_not_empty(self)
        return int(np.argmin(self.values()))

    def index_max(self) -> int:
        check_not_empty(self)
        return int(np.argmax(self.values()))

    # ------------------------------------------------------------------
    # structure
    # ------------------------------------------------------------------
    def t(self):
        """Transposed copy."""
        values = self.to_numpy().T.ravel(order="F")
        kind = {"col": "row", "row": "col"}.get(self._result_kind, "mat")
        return self._new(values, self.n_cols, self.n_rows, kind=kind)

    def swap_rows(self, row1: int, row2: int) -> None:
        check_index(row1, self.n_rows, "row")
        check_index(row2, self.n_rows, "row")
        storage = self._storage()
        grid = self._offsets().reshape((self.n_rows, self.n_cols), order="F")
        storage[grid[[row1, row2], :]] = storage[grid[[row2, row1], :]]

    def swap_cols(self, col1: int, col2: int) -> None:
        check_index(col1, self.n_cols, "column")
        check_index(col2, self.n_cols, "column")
        storage = self._storage()
        grid = self._offsets().reshape((self.n_rows, self.n_cols), order="F")
        storage[grid[:, [col1, col2]]] = storage[grid[:, [col2, col1]]]

    def each_col(self, op: Op, operand=None, indices=None):
        """
        Apply `op` to each column (or the listed ones) through a column view.

        A matrix operand must be a column vector with `n_rows` elements.
        """
        if isinstance(operand, AbstractMat) and (
            operand.n_cols != 1 or operand.n_rows != self.n_rows
        ):
            raise DimensionError(
                f"each_col: expected a ({self.n_rows}, 1) operand, got "
                f"({operand.n_rows}, {operand.n_cols})."
            )
        if indices is None:
            selected = range(self.n_cols)
        else:
            selected = to_index_array(indices, self.n_cols, "column")
        for j in selected:
            self.col(int(j)).in_place(op, operand)
        return self

    def each_row(self, op: Op, operand=None, indices=None):
        """Row-wise counterpart of `each_col`; operands are (1, n_cols)."""
        if isinstance(operand, AbstractMat) and (
            operand.n_rows != 1 or operand.n_cols != self.n_cols
        ):
            raise DimensionError(
                f"each_row: expected a (1, {self.n_cols}) operand, got "
                f"({operand.n_rows}, {operand.n_cols})."
            )
        if indices is None:
            selected = range(self.n_rows)
        else:
            selected = to_index_array(indices, self.n_rows, "row")
        for i in selected:
            self.row(int(i)).in_place(op, operand)
        return self

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return persistence.format_matrix(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.n_rows}x{self.n_cols}>"

    def print(self, header: str = "", stream=None) -> None:
        persistence.print_matrix(self, header, stream)

    def raw_print(self, header: str = "", stream=None) -> None:
        persistence.print_matrix(self, header, stream, raw=True)

    def save(self, target) -> bool:
        persistence.save(self, target)
        return True

    def quiet_save(self, target) -> bool:
        return persistence.quiet_save(self, target)
