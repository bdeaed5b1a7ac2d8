# iqs/bench.py
"""
Throughput of the three single-qubit kernel variants, per target qubit.

    python -m iqs.bench --qubits 14 --variants serial outer inner --tile 16
"""
import argparse, csv, os, socket, time
from datetime import datetime
from statistics import median

import numpy as np

from . import gates as G
from .kernel import VARIANTS, thread_limit
from .logging_config import setup_logging

DATA_DIR = os.path.join(os.getcwd(), "data")

HEADER = ["qubits", "k", "variant", "threads", "tile", "wall_ms", "hostname", "dtype", "timestamp"]

def meta_row(dtype):
    return {
        "hostname": socket.gethostname(),
        "dtype": np.dtype(dtype).name,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

# ---------------------------------------------------------------------

def random_state(n, dtype=np.complex64, seed=0):
    rng = np.random.default_rng(seed)
    psi = rng.standard_normal(1 << n) + 1j*rng.standard_normal(1 << n)
    psi /= np.linalg.norm(psi)
    return psi.astype(dtype)

def run_variant(variant, k, matrix, psi, tile):
    if variant == "inner":
        VARIANTS[variant](k, matrix, psi, tile=tile)
    else:
        VARIANTS[variant](k, matrix, psi)

def time_variant(variant, k, matrix, psi, tile, repeats):
    walls = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        run_variant(variant, k, matrix, psi, tile)
        walls.append((time.perf_counter() - t0) * 1e3)  # ms
    return median(walls)

def bench_single(n, variants, out_path, tile=16, repeats=5, dtype=np.complex64, threads=None):
    print(f"[run] single-qubit kernels, n={n} → {out_path}")
    new_csv(out_path)
    psi = random_state(n, dtype=dtype, seed=42)
    matrix = G.H(dtype)
    with thread_limit(threads) as pool:
        for variant in variants:
            run_variant(variant, 0, matrix, psi, tile)  # JIT warmup
            for k in range(n):
                wall = time_variant(variant, k, matrix, psi, tile, repeats)
                m = meta_row(dtype)
                write_row(out_path, {
                    "qubits": n, "k": k, "variant": variant,
                    "threads": 1 if variant == "serial" else pool,
                    "tile": tile if variant == "inner" else 0,
                    "wall_ms": f"{wall:.4f}",
                    "hostname": m["hostname"], "dtype": m["dtype"], "timestamp": m["timestamp"],
                })
                print(f"  {variant:>6}  k={k:<2d}  wall={wall:.3f} ms")
    print("✓ done.\n")
    return out_path

# ---------------------------------------------------------------------

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Benchmark the single-qubit kernel variants.")
    ap.add_argument("--qubits", type=int, default=14)
    ap.add_argument("--variants", nargs="+", default=list(VARIANTS), choices=list(VARIANTS))
    ap.add_argument("--tile", type=int, default=16)
    ap.add_argument("--repeats", type=int, default=5)
    ap.add_argument("--threads", type=int, default=None)
    ap.add_argument("--dtype", choices=["complex64", "complex128"], default="complex64")
    ap.add_argument("--out", default=os.path.join(DATA_DIR, "kernel_single.csv"))
    ap.add_argument("--verbose", action="store_true")
    return ap.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        setup_logging()
    bench_single(args.qubits, args.variants, args.out, tile=args.tile, repeats=args.repeats,
                 dtype=np.dtype(args.dtype).type, threads=args.threads)

if __name__ == "__main__":
    main()
