"""Tests for CSV export, matrix loading and JSON summaries."""
import json

import numpy as np
import pytest

from graphome.errors import DimensionMismatchError, IoFailureError
from graphome.utils import load_matrix, save_json, save_matrix_to_csv


def test_save_array_to_csv(tmp_path):
    output_path = tmp_path / "test_output.csv"
    save_matrix_to_csv(np.array([[1.0, 2.0], [3.0, 4.0]]), output_path)

    contents = output_path.read_text(encoding="utf-8")
    assert contents.strip() == "1.0,2.0\n3.0,4.0"


def test_save_array_to_csv_name(tmp_path):
    """The original tool's writer name produces the same file."""
    from graphome.utils import save_array_to_csv

    save_array_to_csv(np.array([[0.5, -1.0]]), tmp_path / "a.csv")
    assert (tmp_path / "a.csv").read_text(encoding="utf-8") == "0.5,-1.0\n"


def test_save_csv_overwrites_and_keeps_precision(tmp_path):
    output_path = tmp_path / "out.csv"
    output_path.write_text("stale\nstale\nstale\n", encoding="utf-8")

    v = 1.0 / np.sqrt(2.0)
    save_matrix_to_csv(np.array([[v, -0.5]]), output_path)

    lines = output_path.read_text(encoding="utf-8").splitlines()
    assert lines == [f"{v!r},-0.5"]
    assert float(lines[0].split(",")[0]) == v


def test_save_csv_errors(tmp_path):
    with pytest.raises(IoFailureError):
        save_matrix_to_csv(np.eye(2), tmp_path / "missing" / "out.csv")
    with pytest.raises(OSError):
        save_matrix_to_csv(np.eye(2), tmp_path / "missing" / "out.csv")
    with pytest.raises(DimensionMismatchError):
        save_matrix_to_csv(np.arange(3.0), tmp_path / "vec.csv")


def test_load_matrix_csv_and_npy(tmp_path):
    L = np.array([[1.0, -1.0], [-1.0, 1.0]])
    save_matrix_to_csv(L, tmp_path / "L.csv")
    np.save(tmp_path / "L.npy", L)

    assert np.array_equal(load_matrix(tmp_path / "L.csv"), L)
    assert np.array_equal(load_matrix(tmp_path / "L.npy"), L)


def test_load_matrix_errors(tmp_path):
    with pytest.raises(IoFailureError):
        load_matrix(tmp_path / "nope.csv")

    (tmp_path / "rect.csv").write_text("1.0,2.0,3.0\n4.0,5.0,6.0\n", encoding="utf-8")
    with pytest.raises(DimensionMismatchError):
        load_matrix(tmp_path / "rect.csv")


def test_save_json_handles_numpy(tmp_path):
    path = tmp_path / "nested" / "summary.json"
    save_json(path, {"ngec": np.float64(0.5), "eigenvalues": np.array([0.0, 1.0]), "n": np.int64(2)})

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"ngec": 0.5, "eigenvalues": [0.0, 1.0], "n": 2}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
