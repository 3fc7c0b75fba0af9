"""Typed failures raised by the eigen pipeline.

Each error also derives from the builtin type callers would otherwise expect
(``ValueError``, ``LinAlgError``, ``OSError``) so existing ``except`` clauses
keep working.
"""
from __future__ import annotations

import numpy as np


class GraphomeError(Exception):
    """Base class for all graphome failures."""


class InvalidBandwidthError(GraphomeError, ValueError):
    """Bandwidth outside [0, N-1]."""


class DimensionMismatchError(GraphomeError, ValueError):
    """Non-square matrix or incompatible shapes."""


class SolverFailureError(GraphomeError, np.linalg.LinAlgError):
    """Eigensolver did not converge or rejected its arguments."""


class DegenerateSpectrumError(GraphomeError, ValueError):
    """NGEC is undefined for this spectrum (zero sum, N <= 1, negative mass)."""


class IoFailureError(GraphomeError, OSError):
    """Writing a result file failed."""
