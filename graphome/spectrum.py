"""Spectral summaries of Laplacian eigenvalues.

NGEC (normalized graph entropy coefficient) is the Shannon entropy of the
eigenvalue distribution divided by its maximum, log(N). Values near 1 mean
the spectrum is spread evenly; values near 0 mean a few eigenvalues dominate.

Tolerances here are relative to the largest eigenvalue magnitude, so every
summary is unchanged when the Laplacian is rescaled.
"""
import numpy as np
from scipy.stats import entropy

from .errors import DegenerateSpectrumError


def _spectrum_scale(w: np.ndarray) -> float:
    return float(np.abs(w).max()) if w.size else 0.0


def _spectrum_distribution(eigenvalues: np.ndarray, tol: float) -> np.ndarray:
    w = np.asarray(eigenvalues, dtype=float).ravel()
    if not np.all(np.isfinite(w)):
        raise DegenerateSpectrumError("Eigenvalues contain NaN or Inf")
    scale = _spectrum_scale(w)
    if np.any(w < -tol * scale):
        raise DegenerateSpectrumError(f"Eigenvalues contain negative values (min {w.min():.3e})")
    w = np.clip(w, 0.0, None)
    total = w.sum()
    if total <= 0.0:
        raise DegenerateSpectrumError("Sum of eigenvalues is zero; entropy is undefined")
    return w / total


def compute_ngec(eigenvalues: np.ndarray, tol: float = 1e-9) -> float:
    """
    Normalized graph entropy coefficient of a spectrum.

    NGEC = -sum(p_i * log(p_i)) / log(N), with p = eigenvalues / sum(eigenvalues).
    Zero entries contribute nothing. Input need not be sorted.

    Args:
        eigenvalues: Spectrum (N,), non-negative up to rounding
        tol: Values in [-tol * max|w|, 0) are rounding noise and count as zero

    Returns:
        NGEC in [0, 1]. Strictly inside (0, 1) unless all mass sits on one
        eigenvalue (exactly 0) or the spectrum is uniform (exactly 1).

    Raises:
        DegenerateSpectrumError: N <= 1, zero sum, negative or non-finite values
    """
    w = np.asarray(eigenvalues, dtype=float).ravel()
    if w.size <= 1:
        raise DegenerateSpectrumError(f"NGEC needs at least two eigenvalues, got {w.size}")
    p = _spectrum_distribution(w, tol)
    return float(entropy(p) / np.log(w.size))


def spectral_entropy(eigenvalues: np.ndarray, tol: float = 1e-9) -> float:
    """Shannon entropy (nats) of the normalized spectrum."""
    return float(entropy(_spectrum_distribution(eigenvalues, tol)))


def effective_rank(eigenvalues: np.ndarray, tol: float = 1e-9) -> float:
    """exp(spectral entropy); number of eigenvalues that effectively carry the spectrum."""
    return float(np.exp(spectral_entropy(eigenvalues, tol)))


def count_components(eigenvalues: np.ndarray, tol: float = 1e-9) -> int:
    """Number of near-zero Laplacian eigenvalues (|w| <= tol * max|w|), i.e. connected components."""
    w = np.asarray(eigenvalues, dtype=float).ravel()
    return int(np.sum(np.abs(w) <= tol * _spectrum_scale(w)))


def algebraic_connectivity(eigenvalues: np.ndarray) -> float:
    """Second-smallest eigenvalue (Fiedler value); 0 for a disconnected graph."""
    w = np.sort(np.asarray(eigenvalues, dtype=float).ravel())
    if w.size < 2:
        raise DegenerateSpectrumError("Algebraic connectivity needs at least two eigenvalues")
    return float(w[1])


def spectral_stats(eigenvalues: np.ndarray, tol: float = 1e-9) -> dict:
    """
    Convenience wrapper for all spectral summaries.

    Args:
        eigenvalues: Laplacian spectrum (N,)
        tol: Zero threshold shared by all summaries

    Returns:
        Dictionary with:
            - ngec
            - spectral_entropy
            - effective_rank
            - algebraic_connectivity
            - n_components
            - eigenvalues: ascending spectrum
    """
    w = np.sort(np.asarray(eigenvalues, dtype=float).ravel())
    return {
        "ngec": compute_ngec(w, tol),
        "spectral_entropy": spectral_entropy(w, tol),
        "effective_rank": effective_rank(w, tol),
        "algebraic_connectivity": algebraic_connectivity(w),
        "n_components": count_components(w, tol),
        "eigenvalues": w,
    }
