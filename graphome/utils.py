"""File helpers: matrix loading, CSV result export and JSON summaries."""
from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

import numpy as np

from .errors import DimensionMismatchError, IoFailureError


def ensure_dir(path: str | Path) -> Path:
    """Create directory if it doesn't exist."""
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _to_jsonable(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def save_json(path: str | Path, obj: Any) -> None:
    """Save object to JSON file."""
    path = Path(path)
    if is_dataclass(obj):
        obj = asdict(obj)
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, sort_keys=True, default=_to_jsonable)


def save_matrix_to_csv(matrix: np.ndarray, path: str | Path) -> Path:
    """Write a 2D array as comma-separated rows, overwriting the target.

    Values use Python's float repr (``1.0``, ``0.7071067811865476``); there is
    no header and no quoting. The parent directory must already exist.

    Raises:
        DimensionMismatchError: matrix is not 2D
        IoFailureError: the file could not be written
    """
    M = np.asarray(matrix, dtype=float)
    if M.ndim != 2:
        raise DimensionMismatchError(f"Expected a 2D array, got shape {M.shape}")

    path = Path(path)
    try:
        with path.open("w", encoding="utf-8") as f:
            for row in M:
                f.write(",".join(str(float(x)) for x in row))
                f.write("\n")
    except OSError as err:
        raise IoFailureError(f"Failed to write {path}: {err}") from err
    return path


save_array_to_csv = save_matrix_to_csv


def load_matrix(path: str | Path) -> np.ndarray:
    """Load a square matrix from .npy or comma-delimited text."""
    path = Path(path)
    try:
        if path.suffix == ".npy":
            M = np.load(path)
        else:
            M = np.loadtxt(path, delimiter=",", dtype=float, ndmin=2)
    except OSError as err:
        raise IoFailureError(f"Failed to read {path}: {err}") from err

    M = np.asarray(M, dtype=float)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise DimensionMismatchError(f"{path} does not hold a square matrix (shape {M.shape})")
    return M
