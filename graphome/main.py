"""Command line entry point: eigendecompose Laplacian matrices and summarize their spectra."""
from __future__ import annotations

import argparse
import sys
from dataclasses import asdict
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from .banded import max_band
from .eigen import EigenConfig, compare_solvers, eigendecompose, select_solver
from .errors import GraphomeError
from .spectrum import spectral_stats
from .utils import ensure_dir, load_matrix, save_json, save_matrix_to_csv


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Bandedness-aware eigendecomposition of symmetric (Laplacian) matrices.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("inputs", nargs="+", help="Square matrices as .csv (comma-delimited) or .npy")

    # Solver dispatch
    p.add_argument("--solver", type=str, default="auto", choices=["auto", "banded", "dense"])
    p.add_argument("--band-ratio", type=float, default=0.5,
                   help="Use the banded solver when bandwidth <= band_ratio * n")
    p.add_argument("--small-matrix-size", type=int, default=3,
                   help="Always use the banded solver at or below this size")
    p.add_argument("--zero-tol", type=float, default=1e-12,
                   help="Entries at or below zero_tol times the largest magnitude do not widen the band")
    p.add_argument("--tolerance", type=float, default=1e-9,
                   help="Allowed deviation between solver paths for --compare")
    p.add_argument("--compare", action="store_true",
                   help="Also run both solver paths and report their deviation")

    # Output
    p.add_argument("--outdir", type=str, default="results/run1")
    p.add_argument("--no-plots", action="store_true")
    p.add_argument("--no-progress", action="store_true")

    return p.parse_args(argv)


def plot_spectrum(eigenvalues: np.ndarray, ngec: float, outpath: Path) -> None:
    """Plot the ascending eigenvalue spectrum with its NGEC."""
    plt.figure(figsize=(8, 6))
    plt.plot(eigenvalues, 'o-', linewidth=1.5, markersize=4)
    plt.xlabel('Eigenvalue Index', fontsize=12)
    plt.ylabel('Eigenvalue', fontsize=12)
    plt.title(f'Laplacian Spectrum (NGEC = {ngec:.4f})', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(outpath, dpi=150)
    plt.close()


def process_matrix(path: Path, cfg: EigenConfig, args, outdir: Path) -> dict:
    """Decompose one matrix, write its CSV/plot outputs and return its summary."""
    L = load_matrix(path)
    n = L.shape[0]
    kd = max_band(L, cfg.zero_tol)
    solver = select_solver(n, kd, cfg)

    eigvals, eigvecs = eigendecompose(L, cfg)
    stats = spectral_stats(eigvals, tol=cfg.tolerance)

    stem = path.stem
    save_matrix_to_csv(eigvals[:, None], outdir / f"{stem}_eigenvalues.csv")
    save_matrix_to_csv(eigvecs, outdir / f"{stem}_eigenvectors.csv")

    summary = {
        "n": n,
        "bandwidth": kd,
        "solver": solver.name,
        "ngec": stats["ngec"],
        "spectral_entropy": stats["spectral_entropy"],
        "effective_rank": stats["effective_rank"],
        "algebraic_connectivity": stats["algebraic_connectivity"],
        "n_components": stats["n_components"],
    }

    if args.compare:
        summary["comparison"] = asdict(compare_solvers(L, cfg))

    if not args.no_plots:
        plot_spectrum(eigvals, stats["ngec"], outdir / f"{stem}_spectrum.png")

    return summary


def main(argv=None) -> int:
    args = parse_args(argv)
    outdir = ensure_dir(args.outdir)

    print("=" * 60)
    print("GRAPHOME EIGEN")
    print("=" * 60)

    cfg = EigenConfig(
        solver=args.solver,
        band_ratio=args.band_ratio,
        small_matrix_size=args.small_matrix_size,
        zero_tol=args.zero_tol,
        tolerance=args.tolerance,
    )

    print(f"[1] Processing {len(args.inputs)} matrix file(s)...")
    results = {}
    failures = {}
    for name in tqdm(args.inputs, desc="Eigendecomposition", disable=args.no_progress):
        path = Path(name)
        try:
            results[path.stem] = process_matrix(path, cfg, args, outdir)
        except (GraphomeError, ValueError) as err:
            failures[path.stem] = f"{type(err).__name__}: {err}"
            print(f"  !! {path}: {failures[path.stem]}")

    print("[2] Writing summary...")
    save_json(outdir / "summary.json", {"config": asdict(cfg), "results": results, "failures": failures})

    print("\n" + "=" * 60)
    print("RESULTS:")
    print("=" * 60)
    for stem, r in results.items():
        line = f"  {stem:<25}: n={r['n']:<5d} kd={r['bandwidth']:<5d} {r['solver']:<7} NGEC = {r['ngec']:.4f}"
        if "comparison" in r:
            ok = "ok" if r["comparison"]["within_tolerance"] else "MISMATCH"
            line += f"  [paths {ok}]"
        print(line)

    print(f"\nOutput saved to: {outdir}/")
    print("=" * 60)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
