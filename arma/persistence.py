# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Plain-text persistence and pretty printing.

File format
-----------
One matrix row per line. Each value is written in scientific notation with
16 digits after the decimal point, right aligned in a 24 character field
(`% 24.16e`). Non-finite values are written as the tokens `Inf`, `-Inf` and
`NaN`, right aligned in the same field. Fields are separated by one space.

Reading splits each line on whitespace. `inf`, `+inf`, `-inf`, `nan` and
`-nan` are accepted in any letter case; every row must have the same number
of values. Blank lines are skipped.
"""

import logging
import os
import sys
from typing import List, Optional

import numpy as np

from .exceptions import ParseError
from .utils import PRINT_PRECISION, SAVE_PRECISION, SAVE_WIDTH

logger = logging.getLogger(__name__)

_SPECIAL_TOKENS = {
    "inf": np.inf,
    "+inf": np.inf,
    "-inf": -np.inf,
    "nan": np.nan,
    "+nan": np.nan,
    "-nan": np.nan,
}


def _non_finite_token(value: float) -> Optional[str]:
    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "-Inf" if value < 0 else "Inf"
    return None


def format_value(value: float, width: int = SAVE_WIDTH, precision: int = SAVE_PRECISION) -> str:
    """One value in the save format."""
    token = _non_finite_token(value)
    if token is not None:
        return f"{token:>{width}}"
    return f"{value: {width}.{precision}e}"


# ----------------------------------------------------------------------
# printing
# ----------------------------------------------------------------------
def format_matrix(X, precision: int = PRINT_PRECISION, raw: bool = False) -> str:
    """
    Human readable rendering, one row per line, columns aligned.

    `raw` prints every value with full round-trip precision instead of
    `precision` fixed decimals.
    """
    grid = X.to_numpy()
    head = f"({X.n_rows}, {X.n_cols})-matrix: ["
    if grid.size == 0:
        return head + "]"

    def _cell(v: float) -> str:
        token = _non_finite_token(v)
        if token is not None:
            return token
        return repr(float(v)) if raw else f"{v:.{precision}f}"

    cells = [[_cell(v) for v in row] for row in grid]
    width = max(len(c) for row in cells for c in row)
    lines = [head]
    lines.extend(" " + " ".join(f"{c:>{width}}" for c in row) for row in cells)
    lines.append("]")
    return "\n".join(lines)


def print_matrix(X, header: str = "", stream=None, raw: bool = False) -> None:
    stream = sys.stdout if stream is None else stream
    if header:
        stream.write(header + "\n")
    stream.write(format_matrix(X, raw=raw) + "\n")


# ----------------------------------------------------------------------
# saving
# ----------------------------------------------------------------------
def dumps(X) -> str:
    """The save format of X as a string."""
    lines = [" ".join(format_value(v) for v in row) for row in X.to_numpy()]
    return "".join(line + "\n" for line in lines)


def save(X, target) -> None:
    """
    Write X to a path or a text stream.

    Raises
    ------
    OSError
        If the file cannot be written.
    """
    text = dumps(X)
    if isinstance(target, (str, os.PathLike)):
        with open(target, "w", encoding="utf-8") as fh:
            fh.write(text)
    else:
        target.write(text)
    logger.debug("saved (%d, %d)-matrix to %r", X.n_rows, X.n_cols, target)


def quiet_save(X, target) -> bool:
    """Like `save`, but reports failure by returning False."""
    try:
        save(X, target)
    except OSError as err:
        logger.warning("quiet_save(%r) failed: %s", target, err)
        return False
    return True


# ----------------------------------------------------------------------
# loading
# ----------------------------------------------------------------------
def _parse_token(token: str, line_number: int) -> float:
    special = _SPECIAL_TOKENS.get(token.lower())
    if special is not None:
        return special
    try:
        return float(token)
    except ValueError as err:
        raise ParseError(
            f"line {line_number}: cannot parse {token!r} as a number.",
            line_number=line_number,
        ) from err


def loads(text: str):
    """Parse the save format; an input without values gives an empty Mat."""
    return _parse_lines(text.splitlines())


def _parse_lines(lines):
    from .mat import Mat

    rows: List[List[float]] = []
    n_cols = None
    for line_number, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        if n_cols is None:
            n_cols = len(tokens)
        elif len(tokens) != n_cols:
            raise ParseError(
                f"line {line_number}: expected {n_cols} values, got {len(tokens)}. "
                "All rows must have the same number of columns.",
                line_number=line_number,
            )
        rows.append([_parse_token(t, line_number) for t in tokens])

    if not rows:
        return Mat()
    return Mat(np.array(rows, dtype=float))


def load(source):
    """
    Read a matrix from a path or a text stream.

    Raises
    ------
    ParseError
        On ragged rows or unparseable values.
    OSError
        If the file cannot be read.
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, "r", encoding="utf-8") as fh:
            result = _parse_lines(fh)
    else:
        result = _parse_lines(source)
    logger.debug("loaded (%d, %d)-matrix from %r", result.n_rows, result.n_cols, source)
    return result


def quiet_load(source):
    """Like `load`, but returns None instead of raising."""
    try:
        return load(source)
    except (OSError, ParseError) as err:
        logger.warning("quiet_load(%r) failed: %s", source, err)
        return None
