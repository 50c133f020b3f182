# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from arma.benchmark_views import run


def test_run_produces_one_row_per_kernel_and_size():
    df = run(sizes=[(6, 5), (10, 10)], repeats=1)
    assert list(df.columns) == ["kernel", "size", "sec", "sec/NumPy"]
    assert len(df) == 2 * 7
    assert set(df["size"]) == {"6x5", "10x10"}
    assert (df["sec"] >= 0).all()
