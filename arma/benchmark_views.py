#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time the generic in-place dispatch through each view kind against the
equivalent plain NumPy slicing.

Run `python -m arma.benchmark_views` to print the table and write
`bench_views.csv`.
"""

import time

import numpy as np
import pandas as pd

from .mat import Mat
from .op import Op

REPEATS = 5  # best of 5 runs
SIZES = [(100, 100), (500, 500), (2000, 500)]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def _cases(A: Mat, ref: np.ndarray):
    """(kernel, arma call, numpy call) triples, each doing the same update."""
    m, n = A.n_rows, A.n_cols
    idx = np.arange(0, A.n_elem, 7)
    rows = np.arange(0, m, 3)
    return [
        ("full", lambda: A.in_place(Op.PLUS, 1.0), lambda: ref.__iadd__(1.0)),
        ("col", lambda: A.col(n // 2).in_place(Op.TIMES, 2.0), lambda: ref[:, n // 2].__imul__(2.0)),
        ("row", lambda: A.row(m // 2).in_place(Op.MINUS, 1.0), lambda: ref[m // 2, :].__isub__(1.0)),
        (
            "submat",
            lambda: A.submat(1, 1, m - 2, n - 2).in_place(Op.NEGATE),
            lambda: np.negative(ref[1:-1, 1:-1], out=ref[1:-1, 1:-1]),
        ),
        ("diag", lambda: A.diag().in_place(Op.INCREMENT), lambda: ref.ravel(order="F")[:: m + 1].__iadd__(1.0)),
        ("elem", lambda: A.elem(idx).in_place(Op.EQUAL, 0.0), lambda: ref.reshape(-1, order="F").__setitem__(idx, 0.0)),
        (
            "rows",
            lambda: A.rows(rows).in_place(Op.ELEMDIVIDE, 2.0),
            lambda: ref.__setitem__(rows, ref[rows] / 2.0),
        ),
    ]


def run(sizes=SIZES, repeats: int = REPEATS, seed: int = 0) -> pd.DataFrame:
    """
    Benchmark every view kind at every size.

    Returns
    -------
    DataFrame with columns kernel, size, sec, sec/NumPy.
    """
    rng = np.random.default_rng(seed)
    records = []
    for m, n in sizes:
        values = rng.standard_normal((m, n))
        A = Mat(values)
        ref = np.asfortranarray(values.copy())
        for kernel, arma_call, numpy_call in _cases(A, ref):
            t_arma = min(wall(arma_call) for _ in range(repeats))
            t_np = min(wall(numpy_call) for _ in range(repeats))
            records.append((kernel, f"{m}x{n}", t_arma, t_arma / t_np if t_np else np.inf))

    return pd.DataFrame(records, columns=["kernel", "size", "sec", "sec/NumPy"])


if __name__ == "__main__":
    df = run()
    print(df.to_string(index=False))
    df.to_csv("bench_views.csv", index=False)
