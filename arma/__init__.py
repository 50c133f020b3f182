# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
arma
====

Dense real matrices with Armadillo-style live views, in-place operators and
a function library, on top of NumPy and SciPy.

Public API
~~~~~~~~~~
- Containers
    - `Mat`, `Col`, `Row`, `Fill`
- Views (returned by `col`, `row`, `cols`, `rows`, `submat`, `elem`, `diag`)
    - `ViewSubCol`, `ViewSubRow`, `ViewSubMat`, `ViewDiag`, `ViewElem`,
      `ViewElemSubMat`
- In-place instruction set
    - `Op`, `Span`, `Size`
- Generation
    - `zeros`, `ones`, `eye`, `randu`, `randn`, `randi`, `linspace`,
      `repmat`, `toeplitz`, `circ_toeplitz`, `set_seed`, `set_seed_random`
- Element-wise functions
    - `abs`, `exp`, `log`, `sqrt`, `pow`, `sin`, ... (see `arma.elementwise`)
- Statistics
    - `accu`, `sum`, `prod`, `mean`, `median`, `var`, `stddev`, `min`,
      `max`, `range`, `any`, `all`, `cumsum`, `cov`, `cor`, `hist`, `histc`
- Structure
    - `trans`, `dot`, `norm`, `join_cols`, `join_rows`, `sort`, `find`,
      `kron`, ... (see `arma.manipulation`)
- Decompositions
    - `lu`, `qr`, `qr_econ`, `svd`, `svd_econ`, `eig_sym`, `chol`, `inv`,
      `pinv`, `solve`, `det`, `log_det`, `rank`
- Persistence and streaming statistics
    - `save`, `load`, `RunningStat`, `RunningStatVec`, `Datum`

Note that `sum`, `min`, `max`, `abs`, `round`, `pow`, `range`, `any` and
`all` shadow the builtins when star-imported.

Example
-------
>>> import arma
>>> A = arma.Mat([[1.0, 2.0], [3.0, 4.0]])
>>> _ = A.col(1).in_place(arma.Op.PLUS, 10.0)
>>> A.at(0, 1)
12.0
"""

from importlib.metadata import version as _pkg_version

from .base import AbstractMat
from .datum import Datum
from .eigen import eig_sym
from .elementwise import (
    abs,
    acos,
    acosh,
    asin,
    asinh,
    atan,
    atanh,
    ceil,
    cos,
    cosh,
    eps,
    exp,
    exp2,
    exp10,
    floor,
    log,
    log2,
    log10,
    pow,
    round,
    sign,
    sin,
    sinh,
    sqrt,
    square,
    tan,
    tanh,
    trunc_exp,
    trunc_log,
)
from .exceptions import (
    ArmaError,
    ConvergenceError,
    DimensionError,
    EmptyMatrixError,
    InvalidSpanError,
    InvalidViewError,
    NotPositiveDefiniteError,
    NumericalError,
    OutOfBoundsError,
    ParseError,
    SingularMatrixError,
    UnsupportedOperationError,
)
from .generation import (
    circ_toeplitz,
    eye,
    linspace,
    ones,
    randi,
    randn,
    randu,
    repmat,
    set_seed,
    set_seed_random,
    toeplitz,
    zeros,
)
from .lu import lu
from .manipulation import (
    as_scalar,
    conv,
    cross,
    diagmat,
    diagvec,
    dot,
    find,
    fliplr,
    flipud,
    is_finite,
    join_cols,
    join_horiz,
    join_rows,
    join_vert,
    kron,
    norm,
    norm_dot,
    reshape,
    resize,
    shuffle,
    sort,
    sort_index,
    stable_sort_index,
    symmatl,
    symmatu,
    trace,
    trans,
    trimatl,
    trimatu,
    unique,
    vectorise,
)
from .mat import Col, Fill, Mat, Row
from .matrix_functions import chol, det, inv, log_det, pinv, rank, solve
from .op import Op
from .persistence import load, save
from .qr import qr, qr_econ
from .running_stat import RunningStat, RunningStatVec
from .span import Size, Span
from .statistics import (
    accu,
    all,
    any,
    cor,
    cov,
    cumsum,
    hist,
    histc,
    max,
    mean,
    median,
    min,
    prod,
    range,
    stddev,
    sum,
    var,
)
from .svd import svd, svd_econ
from .utils import EPS, scale_tol
from .views import (
    AbstractView,
    ViewDiag,
    ViewElem,
    ViewElemSubMat,
    ViewSubCol,
    ViewSubMat,
    ViewSubRow,
)

__all__ = [
    # containers and views
    "AbstractMat",
    "Mat",
    "Col",
    "Row",
    "Fill",
    "AbstractView",
    "ViewSubCol",
    "ViewSubRow",
    "ViewSubMat",
    "ViewDiag",
    "ViewElem",
    "ViewElemSubMat",
    "Op",
    "Span",
    "Size",
    # generation
    "zeros",
    "ones",
    "eye",
    "randu",
    "randn",
    "randi",
    "linspace",
    "repmat",
    "toeplitz",
    "circ_toeplitz",
    "set_seed",
    "set_seed_random",
    # element-wise
    "abs",
    "eps",
    "exp",
    "exp2",
    "exp10",
    "trunc_exp",
    "log",
    "log2",
    "log10",
    "trunc_log",
    "pow",
    "sqrt",
    "square",
    "floor",
    "ceil",
    "round",
    "sign",
    "sin",
    "asin",
    "sinh",
    "asinh",
    "cos",
    "acos",
    "cosh",
    "acosh",
    "tan",
    "atan",
    "tanh",
    "atanh",
    # statistics
    "accu",
    "sum",
    "prod",
    "mean",
    "median",
    "var",
    "stddev",
    "min",
    "max",
    "range",
    "any",
    "all",
    "cumsum",
    "cov",
    "cor",
    "hist",
    "histc",
    # structure
    "trans",
    "dot",
    "norm_dot",
    "norm",
    "trace",
    "as_scalar",
    "is_finite",
    "join_cols",
    "join_vert",
    "join_rows",
    "join_horiz",
    "sort",
    "sort_index",
    "stable_sort_index",
    "reshape",
    "resize",
    "fliplr",
    "flipud",
    "diagmat",
    "diagvec",
    "trimatu",
    "trimatl",
    "symmatu",
    "symmatl",
    "find",
    "conv",
    "cross",
    "kron",
    "shuffle",
    "unique",
    "vectorise",
    # decompositions
    "lu",
    "qr",
    "qr_econ",
    "svd",
    "svd_econ",
    "eig_sym",
    "chol",
    "inv",
    "pinv",
    "solve",
    "det",
    "log_det",
    "rank",
    # persistence and streaming
    "save",
    "load",
    "RunningStat",
    "RunningStatVec",
    "Datum",
    # errors
    "ArmaError",
    "DimensionError",
    "EmptyMatrixError",
    "OutOfBoundsError",
    "InvalidSpanError",
    "UnsupportedOperationError",
    "InvalidViewError",
    "ParseError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    # configuration
    "EPS",
    "scale_tol",
]

# ---------------------------------------------------------------------
# Version string (helps "pip show arma", Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
