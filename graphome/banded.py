"""Bandwidth analysis and compact band storage for symmetric matrices."""
from __future__ import annotations

import numpy as np

from .errors import DimensionMismatchError, InvalidBandwidthError


def _as_square(matrix: np.ndarray) -> np.ndarray:
    A = np.asarray(matrix, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise DimensionMismatchError(f"Expected a square 2D matrix, got shape {A.shape}")
    return A


def max_band(matrix: np.ndarray, tol: float = 1e-12) -> int:
    """
    Bandwidth of a matrix: the largest |i - j| over entries with
    |A[i, j]| > tol * max|A|.

    Args:
        matrix: Square matrix (n, n)
        tol: Relative threshold; entries at or below tol times the largest
            magnitude are treated as zero, so rescaling A does not change kd

    Returns:
        kd in [0, n-1]; 0 for diagonal, zero, empty or 1x1 matrices
    """
    A = _as_square(matrix)
    if A.size == 0:
        return 0
    mags = np.abs(A)
    rows, cols = np.nonzero(mags > tol * mags.max())
    if rows.size == 0:
        return 0
    return int(np.max(np.abs(rows - cols)))


analyze_bandwidth = max_band


def to_banded_format(matrix: np.ndarray, kd: int) -> np.ndarray:
    """Pack the diagonals within bandwidth kd into a (kd+1, n) array.

    Row kd holds the main diagonal. Row kd-d holds the d-th off-diagonal,
    packed from column 0 (``ab[kd-d, c] = A[c, c+d]``) with the last d
    entries left at zero. Entries outside the band are ignored.

    Example:
        >>> to_banded_format(np.array([[1, 2, 0], [2, 3, 4], [0, 4, 5]]), 1)
        array([[2., 4., 0.],
               [1., 3., 5.]])

    Reversing the rows gives LAPACK lower band storage
    (``ab[::-1][d, c] = A[c+d, c]``).
    """
    A = _as_square(matrix)
    n = A.shape[0]
    if isinstance(kd, bool) or not isinstance(kd, (int, np.integer)):
        raise InvalidBandwidthError(f"Bandwidth must be an integer, got {kd!r}")
    if not 0 <= kd <= max(n - 1, 0):
        raise InvalidBandwidthError(f"Bandwidth {kd} outside [0, {max(n - 1, 0)}] for n={n}")

    kd = int(kd)
    banded = np.zeros((kd + 1, n), dtype=float)
    for d in range(kd + 1):
        diag = np.diagonal(A, offset=d)
        banded[kd - d, : diag.shape[0]] = diag
    return banded
