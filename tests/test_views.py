# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import io

import numpy as np
import pytest

from arma import Col, Mat, Op, Size, Span
from arma.exceptions import (
    DimensionError,
    InvalidViewError,
    OutOfBoundsError,
    UnsupportedOperationError,
)

M, N = 5, 6


def _random(seed: int, shape=(M, N)) -> np.ndarray:
    return np.random.default_rng(seed).standard_normal(shape)


# (name, view builder, numpy index of the same elements)
VIEWS = [
    ("col", lambda A: A.col(2), (slice(None), 2)),
    ("col_span", lambda A: A.col(2, Span(1, 3)), (slice(1, 4), 2)),
    ("row", lambda A: A.row(3), (3, slice(None))),
    ("row_span", lambda A: A.row(3, Span(2, 4)), (3, slice(2, 5))),
    ("cols", lambda A: A.cols(1, 3), (slice(None), slice(1, 4))),
    ("rows", lambda A: A.rows(1, 2), (slice(1, 3), slice(None))),
    ("submat", lambda A: A.submat(1, 2, 3, 4), (slice(1, 4), slice(2, 5))),
    ("submat_size", lambda A: A.submat(0, 1, Size(2, 3)), (slice(0, 2), slice(1, 4))),
    ("submat_span", lambda A: A.submat(Span(2, 4), Span.all()), (slice(2, 5), slice(None))),
    ("getitem_slices", lambda A: A[1:4, 2:5], (slice(1, 4), slice(2, 5))),
    ("single_row_block", lambda A: A.submat(2, 1, 2, 4), (slice(2, 3), slice(1, 5))),
    ("diag", lambda A: A.diag(), (np.arange(5), np.arange(5))),
    ("diag_super", lambda A: A.diag(2), (np.arange(4), np.arange(4) + 2)),
    ("diag_sub", lambda A: A.diag(-1), (np.arange(4) + 1, np.arange(4))),
    ("elem", lambda A: A.elem([0, 7, 29, 12]), np.unravel_index([0, 7, 29, 12], (M, N), order="F")),
    ("rows_idx", lambda A: A.rows([0, 4]), ([0, 4], slice(None))),
    ("cols_idx", lambda A: A.cols(Col([5, 1])), (slice(None), [5, 1])),
    ("submat_idx", lambda A: A.submat([1, 3], [0, 2]), np.ix_([1, 3], [0, 2])),
]
IDS = [name for name, _, _ in VIEWS]


def _expected(ref: np.ndarray, key) -> np.ndarray:
    return np.ravel(ref[key], order="F")


@pytest.mark.parametrize("name,build,key", VIEWS, ids=IDS)
def test_view_reads_the_selected_elements(name, build, key):
    ref = _random(1)
    A = Mat(ref)
    view = build(A)
    np.testing.assert_array_equal(view.values(), _expected(ref, key))
    np.testing.assert_array_equal(list(view), _expected(ref, key))
    assert view.n_elem == _expected(ref, key).size


@pytest.mark.parametrize(
    "build",
    [
        lambda A: A.submat(Span.all(), Span.all()),
        lambda A: A.submat(0, 0, M - 1, N - 1),
        lambda A: A.cols(0, N - 1),
        lambda A: A.rows(0, M - 1),
        lambda A: A[:, :],
        lambda A: A.submat(np.arange(M), np.arange(N)),
    ],
)
def test_full_range_view_is_identical_to_owner(build):
    A = Mat(_random(2))
    view = build(A)
    assert (view.n_rows, view.n_cols) == (A.n_rows, A.n_cols)
    for i in range(M):
        for j in range(N):
            assert view.at(i, j) == A.at(i, j)
    np.testing.assert_array_equal(view.values(), A.values())


@pytest.mark.parametrize("name,build,key", VIEWS, ids=IDS)
def test_write_through_hits_column_major_offsets(name, build, key):
    ref = _random(3)
    A = Mat(ref)
    build(A).in_place(Op.PLUS, 1.5)
    ref[key] += 1.5
    np.testing.assert_array_equal(A.to_numpy(), ref)
    # column-major addressing of the owning buffer
    np.testing.assert_array_equal(A.memptr(), ref.ravel(order="F"))


def _hand_loop(flat: np.ndarray, offsets: np.ndarray, op: Op, operand=None) -> None:
    kernels = {
        Op.INCREMENT: lambda x, r: x + 1.0,
        Op.DECREMENT: lambda x, r: x - 1.0,
        Op.NEGATE: lambda x, r: -x,
        Op.EQUAL: lambda x, r: r,
        Op.PLUS: lambda x, r: x + r,
        Op.MINUS: lambda x, r: x - r,
        Op.TIMES: lambda x, r: x * r,
        Op.ELEMTIMES: lambda x, r: x * r,
        Op.DIVIDE: lambda x, r: x / r,
        Op.ELEMDIVIDE: lambda x, r: x / r,
    }
    for n, offset in enumerate(offsets):
        r = operand[n] if isinstance(operand, np.ndarray) else operand
        flat[offset] = kernels[op](flat[offset], r)


SCALAR_OPS = [Op.EQUAL, Op.PLUS, Op.MINUS, Op.TIMES, Op.ELEMTIMES, Op.DIVIDE, Op.ELEMDIVIDE]
MATRIX_OPS = [Op.EQUAL, Op.PLUS, Op.MINUS, Op.ELEMTIMES, Op.ELEMDIVIDE]
UNARY_OPS = [Op.INCREMENT, Op.DECREMENT, Op.NEGATE]


@pytest.mark.parametrize("name,build,key", VIEWS, ids=IDS)
def test_dispatch_matches_hand_loop(name, build, key):
    offsets_grid = np.arange(M * N).reshape((M, N), order="F")
    offsets = _expected(offsets_grid, key)

    for op in UNARY_OPS + SCALAR_OPS:
        ref = _random(4)
        A = Mat(ref)
        flat = ref.ravel(order="F").copy()
        if op.is_unary:
            build(A).in_place(op)
            _hand_loop(flat, offsets, op)
        else:
            build(A).in_place(op, 2.5)
            _hand_loop(flat, offsets, op, 2.5)
        np.testing.assert_allclose(A.memptr(), flat, rtol=0, atol=0, err_msg=op.name)

    for op in MATRIX_OPS:
        ref = _random(5)
        A = Mat(ref)
        flat = ref.ravel(order="F").copy()
        view = build(A)
        operand = Mat(_random(6, (view.n_rows, view.n_cols)) + 3.0)
        view.in_place(op, operand)
        _hand_loop(flat, offsets, op, operand.values())
        np.testing.assert_allclose(A.memptr(), flat, rtol=0, atol=0, err_msg=op.name)


def test_duplicate_indices_apply_once_per_occurrence():
    A = Mat(np.zeros((3, 3)))
    A.elem([4, 4, 4, 1]).in_place(Op.PLUS, 1.0)
    assert A.at(4) == 3.0
    assert A.at(1) == 1.0

    B = Mat(np.ones((2, 2)))
    B.elem([0, 0]).in_place(Op.TIMES, 3.0)
    assert B.at(0) == 9.0

    C = Mat(np.zeros((2, 2)))
    C.elem([3, 3]).in_place(Op.EQUAL, Mat([[7.0], [8.0]]))
    assert C.at(3) == 8.0


def test_overlapping_operand_behaves_like_a_copy():
    ref = np.arange(10.0).reshape((5, 2), order="F")
    A = Mat(ref)
    A.col(0, Span(1, 4)).in_place(Op.EQUAL, A.col(0, Span(0, 3)))
    expected = ref.copy()
    expected[1:5, 0] = ref[0:4, 0]
    np.testing.assert_array_equal(A.to_numpy(), expected)


def test_views_compose():
    A = Mat(_random(7))
    inner = A.submat(1, 1, 4, 5).col(2)
    np.testing.assert_array_equal(inner.values(), A.col(3, Span(1, 4)).values())

    row_of_block = A.submat(1, 1, 4, 5).row(1, Span(1, 3))
    np.testing.assert_array_equal(row_of_block.values(), A.to_numpy()[2, 2:5])

    picked = A.rows([4, 0]).elem([1, 3])
    np.testing.assert_array_equal(picked.values(), A.to_numpy()[[0, 0], [0, 1]])

    inner.in_place(Op.EQUAL, 0.0)
    assert np.all(A.to_numpy()[1:5, 3] == 0.0)


def test_scalar_assignment_fills_a_view():
    A = Mat(3, 4)
    A.row(1).in_place(Op.EQUAL, 9.0)
    assert (A.row(1).n_rows, A.row(1).n_cols) == (1, 4)
    np.testing.assert_array_equal(A.to_numpy()[1], [9.0] * 4)
    A[0:2, 2:4] = -1.0
    np.testing.assert_array_equal(A.to_numpy()[0:2, 2:4], -np.ones((2, 2)))


def test_view_times_matrix_keeps_shape():
    A = Mat(np.eye(4))
    view = A.submat(0, 0, 1, 1)
    view.in_place(Op.TIMES, Mat([[1.0, 2.0], [3.0, 4.0]]))
    np.testing.assert_array_equal(A.to_numpy()[:2, :2], [[1.0, 2.0], [3.0, 4.0]])

    with pytest.raises(DimensionError):
        A.col(0).in_place(Op.TIMES, Mat(np.ones((1, 3))))


def test_views_reject_shape_changes():
    A = Mat(4, 4)
    with pytest.raises(DimensionError):
        A.col(0).in_place(Op.EQUAL, Mat(2, 2))
    with pytest.raises(DimensionError):
        A.row(0).in_place(Op.PLUS, Col(4))
    with pytest.raises(UnsupportedOperationError):
        A.col(0).in_place(Op.DIVIDE, Col(4))


def test_division_by_zero_is_ieee():
    A = Mat([[1.0, -1.0], [0.0, 2.0]])
    A.col(0).in_place(Op.DIVIDE, 0.0)
    assert A.at(0, 0) == np.inf
    assert np.isnan(A.at(1, 0))
    A.row(0).in_place(Op.ELEMDIVIDE, Mat([[1.0, 0.0]]))
    assert A.at(0, 1) == -np.inf


def test_augmented_operators_on_views():
    A = Mat(np.ones((3, 3)))
    v = A.col(1)
    v += 1.0
    v *= 3.0
    v -= Col([1.0, 2.0, 3.0])
    v /= 2.0
    np.testing.assert_array_equal(A.to_numpy()[:, 1], [2.5, 2.0, 1.5])
    np.testing.assert_array_equal(A.to_numpy()[:, 0], [1.0, 1.0, 1.0])


def test_view_is_invalidated_by_reallocation():
    A = Mat(3, 3)
    view = A.col(1)
    nested = A.submat(0, 0, 1, 1).row(0)
    assert view.is_valid()
    A.set_size(4, 4)
    assert not view.is_valid()
    with pytest.raises(InvalidViewError) as info:
        view.at(0)
    assert info.value.current > info.value.created_at
    with pytest.raises(InvalidViewError):
        nested.in_place(Op.PLUS, 1.0)
    with pytest.raises(InvalidViewError):
        list(view)
    with pytest.raises(InvalidViewError):
        view.col(0)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda A: A.reshape(2, 8),
        lambda A: A.resize(5, 5),
        lambda A: A.insert_rows(0, 1),
        lambda A: A.shed_col(0),
        lambda A: A.reset(),
        lambda A: A.in_place(Op.EQUAL, 1.0),
        lambda A: A.in_place(Op.TIMES, Mat(np.ones((4, 2)))),
        lambda A: A.in_place(Op.EQUAL, Mat(np.ones((2, 8)))),
        lambda A: A.load(io.StringIO("1 2\n3 4\n")),
    ],
)
def test_structural_mutations_invalidate_views(mutate):
    A = Mat(np.ones((4, 4)))
    view = A.diag()
    mutate(A)
    with pytest.raises(InvalidViewError):
        view.values()


def test_value_changes_keep_views_valid():
    A = Mat(np.ones((3, 3)))
    view = A.row(2)
    A.in_place(Op.PLUS, 1.0)
    A.fill(4.0)
    A.in_place(Op.EQUAL, Mat(np.full((3, 3), 5.0)))
    A.in_place(Op.ELEMTIMES, Mat(np.full((3, 3), 2.0)))
    A.in_place(Op.TIMES, Mat(np.eye(3)))
    assert view.is_valid()
    np.testing.assert_array_equal(view.values(), [10.0, 10.0, 10.0])


@pytest.mark.parametrize(
    "build",
    [
        lambda A: A.col(N),
        lambda A: A.row(M),
        lambda A: A.col(0, Span(0, M)),
        lambda A: A.submat(0, 0, M, 0),
        lambda A: A.submat(0, 0, Size(1, N + 1)),
        lambda A: A.cols(3, 2),
        lambda A: A.elem([M * N]),
        lambda A: A.rows([0, M]),
        lambda A: A.diag(N),
        lambda A: A.diag(-M),
    ],
)
def test_out_of_bounds_views_raise(build):
    A = Mat(M, N)
    with pytest.raises(OutOfBoundsError):
        build(A)


def test_view_results_keep_vector_kind():
    A = Mat(_random(8))
    assert isinstance(A.col(0) + 1.0, Col)
    assert type(A.row(0).copy()).__name__ == "Row"
    assert type(A.submat(0, 0, 1, 1).copy()) is Mat
    assert isinstance(A.diag().t(), type(A.row(0).copy()))


@pytest.mark.parametrize(
    "args",
    [(Span(0, 1), [0, 2]), ([1, 3], Span.all())],
)
def test_submat_rejects_mixed_span_and_indices(args):
    A = Mat(_random(9))
    with pytest.raises(TypeError, match="mix"):
        A.submat(*args)
