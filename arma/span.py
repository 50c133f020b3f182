# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import NamedTuple, Optional, Tuple

from .exceptions import InvalidSpanError


class Size(NamedTuple):
    n_rows: int
    n_cols: int


class Span:
    """
    Inclusive range of row or column positions.

    `Span(first, last)`, `Span(position)` or `Span.all()` for the entire
    dimension.
    """

    __slots__ = ("first", "last", "is_entire_range")

    def __init__(self, first: Optional[int] = None, last: Optional[int] = None):
        if first is None:
            if last is not None:
                raise InvalidSpanError("A span needs a first position when given a last one.")
            self.first = -1
            self.last = -1
            self.is_entire_range = True
            return
        if last is None:
            last = first
        if first < 0 or last < 0:
            raise InvalidSpanError(
                f"All positions must be non-negative, got ({first}, {last})."
            )
        if last < first:
            raise InvalidSpanError(
                f"The first position must not exceed the last, got ({first}, {last})."
            )
        self.first = int(first)
        self.last = int(last)
        self.is_entire_range = False

    @classmethod
    def all(cls) -> "Span":
        return cls()

    @classmethod
    def from_slice(cls, s: slice) -> "Span":
        """Convert a step-1 slice with explicit or open bounds."""
        if s.step not in (None, 1):
            raise InvalidSpanError("Only slices with step 1 describe a span.")
        if s.start is None and s.stop is None:
            return cls.all()
        # open ends are resolved against the dimension later
        return _OpenSpan(s.start, s.stop)

    def resolve(self, n: int) -> Tuple[int, int]:
        """Return the inclusive (first, last) pair for a dimension of length n."""
        if self.is_entire_range:
            return 0, n - 1
        return self.first, self.last

    def __eq__(self, other):
        if not isinstance(other, Span):
            return NotImplemented
        return (self.first, self.last, self.is_entire_range) == (
            other.first,
            other.last,
            other.is_entire_range,
        )

    def __hash__(self):
        return hash((self.first, self.last, self.is_entire_range))

    def __repr__(self):
        if self.is_entire_range:
            return "Span.all()"
        return f"Span({self.first}, {self.last})"


class _OpenSpan(Span):
    """Span from a Python slice whose stop is exclusive and may be open."""

    __slots__ = ("_start", "_stop")

    def __init__(self, start: Optional[int], stop: Optional[int]):
        if (start is not None and start < 0) or (stop is not None and stop < 0):
            raise InvalidSpanError("Negative slice bounds are not supported.")
        self._start = 0 if start is None else int(start)
        self._stop = stop
        self.first = self._start
        self.last = -1 if stop is None else int(stop) - 1
        self.is_entire_range = False

    def resolve(self, n: int) -> Tuple[int, int]:
        stop = n if self._stop is None else self._stop
        return self._start, stop - 1
