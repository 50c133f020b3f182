# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Live views over a matrix's buffer.

A view never copies. It records the owning `Mat`, the owner's generation at
creation time and an addressing rule into the owner's buffer. Views built on
other views compose their rules, so every view always addresses the owner
directly. If the owner is reshaped or reallocated afterwards, the next access
through the view raises `InvalidViewError`.

Addressing rules
----------------
ViewSubCol      contiguous    slice(start, stop, 1)
ViewSubRow      strided       slice(start, stop, owner rows)
ViewDiag        strided       slice(start, stop, owner rows + 1)
ViewSubMat      block         contiguous/strided slice when possible, else offsets
ViewElem        index list    offsets
ViewElemSubMat  index lists   offsets
"""

import logging
from typing import Optional

import numpy as np

from .base import AbstractMat, Index
from .exceptions import InvalidViewError

logger = logging.getLogger(__name__)


def compose(parent: Index, logical: Index) -> Index:
    """
    Map logical positions inside a parent onto the parent's physical offsets.

    Slices composed with slices stay slices, so contiguous and strided views
    of views keep their cheap addressing.
    """
    if isinstance(parent, slice):
        if isinstance(logical, slice):
            return slice(
                parent.start + logical.start * parent.step,
                parent.start + logical.stop * parent.step,
                parent.step * logical.step,
            )
        return parent.start + np.asarray(logical, dtype=np.intp) * parent.step
    if isinstance(logical, slice):
        return parent[logical.start : logical.stop : logical.step].copy()
    return parent[np.asarray(logical, dtype=np.intp)]


class AbstractView(AbstractMat):
    """
    Base class of all views.

    Parameters
    ----------
    parent : AbstractMat
        Matrix or view the new view is taken from.
    logical : slice | ndarray
        Positions inside `parent`, in the new view's column-major order.
    n_rows, n_cols : int
        Shape of the view.
    """

    def __init__(self, parent: AbstractMat, logical: Index, n_rows: int, n_cols: int):
        parent._storage()  # a stale parent view must not spawn children
        self._root = parent._owner()
        self._generation = self._root._generation
        self._idx = compose(parent._index(), logical)
        self.n_rows = n_rows
        self.n_cols = n_cols
        self._duplicates = (
            isinstance(self._idx, np.ndarray)
            and np.unique(self._idx).size != self._idx.size
        )

    def _check_valid(self) -> None:
        current = self._root._generation
        if current != self._generation:
            logger.debug(
                "%s accessed after its owner changed (generation %d -> %d)",
                type(self).__name__,
                self._generation,
                current,
            )
            raise InvalidViewError(
                f"{type(self).__name__} is no longer valid: its owner was resized "
                "or reallocated after the view was created.",
                created_at=self._generation,
                current=current,
            )

    def is_valid(self) -> bool:
        return self._root._generation == self._generation

    def _storage(self) -> np.ndarray:
        self._check_valid()
        return self._root._data

    def _index(self) -> Index:
        return self._idx

    def _owner(self):
        return self._root

    def _has_duplicates(self) -> bool:
        return self._duplicates


class ViewSubCol(AbstractView):
    """Rows `first_row..last_row` of one column: a contiguous run."""

    _result_kind = "col"

    def __init__(self, parent: AbstractMat, col_number: int, first_row: int, last_row: int):
        start = first_row + col_number * parent.n_rows
        n = last_row - first_row + 1
        super().__init__(parent, slice(start, start + n, 1), n, 1)


class ViewSubRow(AbstractView):
    """Columns `first_col..last_col` of one row: stride of one column."""

    _result_kind = "row"

    def __init__(self, parent: AbstractMat, row_number: int, first_col: int, last_col: int):
        step = max(parent.n_rows, 1)
        start = row_number + first_col * step
        n = last_col - first_col + 1
        super().__init__(parent, slice(start, start + n * step, step), 1, n)


class ViewSubMat(AbstractView):
    """Rectangular block `[first_row..last_row] x [first_col..last_col]`."""

    def __init__(
        self,
        parent: AbstractMat,
        first_row: int,
        first_col: int,
        last_row: int,
        last_col: int,
    ):
        n_rows = last_row - first_row + 1
        n_cols = last_col - first_col + 1
        stride = parent.n_rows
        start = first_row + first_col * stride
        if n_rows == stride or n_cols == 1:
            # whole columns, or a single column: one contiguous run
            logical: Index = slice(start, start + n_rows * n_cols, 1)
        elif n_rows == 1:
            logical = slice(start, start + n_cols * stride, stride)
        else:
            rows = np.arange(first_row, last_row + 1, dtype=np.intp)
            cols = np.arange(first_col, last_col + 1, dtype=np.intp)
            logical = (rows[:, None] + cols[None, :] * stride).ravel(order="F")
        super().__init__(parent, logical, n_rows, n_cols)


class ViewDiag(AbstractView):
    """The k-th diagonal as a column: stride of one column plus one row."""

    _result_kind = "col"

    def __init__(self, parent: AbstractMat, k: int = 0):
        stride = parent.n_rows
        if k >= 0:
            start = k * stride
            length = min(parent.n_rows, parent.n_cols - k)
        else:
            start = -k
            length = min(parent.n_rows + k, parent.n_cols)
        length = max(length, 0)
        step = stride + 1
        super().__init__(parent, slice(start, start + length * step, step), length, 1)
        self.k = k


class ViewElem(AbstractView):
    """Column vector of arbitrary elements, addressed by linear index."""

    _result_kind = "col"

    def __init__(self, parent: AbstractMat, indices: np.ndarray):
        super().__init__(parent, indices, int(indices.size), 1)


class ViewElemSubMat(AbstractView):
    """
    Cross product of selected rows and selected columns.

    `None` for either selection means every row / every column.
    """

    def __init__(
        self,
        parent: AbstractMat,
        row_indices: Optional[np.ndarray],
        col_indices: Optional[np.ndarray],
    ):
        if row_indices is None:
            row_indices = np.arange(parent.n_rows, dtype=np.intp)
        if col_indices is None:
            col_indices = np.arange(parent.n_cols, dtype=np.intp)
        logical = (row_indices[:, None] + col_indices[None, :] * parent.n_rows).ravel(
            order="F"
        )
        super().__init__(parent, logical, int(row_indices.size), int(col_indices.size))
