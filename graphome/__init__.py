"""Bandedness-aware eigendecomposition and spectral entropy of graph Laplacians."""
from .banded import analyze_bandwidth, max_band, to_banded_format
from .eigen import (
    BandedEigensolver,
    DenseEigensolver,
    EigenConfig,
    SymmetricEigensolver,
    compare_solvers,
    eigendecompose,
    eigendecompose_banded,
    eigendecompose_dense,
    normalize_eigenvector_signs,
    select_solver,
)
from .errors import (
    DegenerateSpectrumError,
    DimensionMismatchError,
    GraphomeError,
    InvalidBandwidthError,
    IoFailureError,
    SolverFailureError,
)
from .spectrum import compute_ngec, spectral_stats
from .utils import save_matrix_to_csv

__version__ = "0.1.0"
