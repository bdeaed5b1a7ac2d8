# iqs/plot_results.py
import csv, os, sys
from collections import defaultdict
from statistics import median

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        r = csv.DictReader(f)
        for row in r:
            row["qubits"]  = int(row["qubits"])
            row["k"]       = int(row["k"])
            row["threads"] = int(row["threads"])
            row["tile"]    = int(row["tile"])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by_key(rows, key_fields):
    buckets = defaultdict(list)
    for r in rows:
        key = tuple(r[k] for k in key_fields)
        buckets[key].append(r["wall_ms"])
    agg = []
    for key, vals in buckets.items():
        out = dict(zip(key_fields, key))
        out["wall_ms"] = float(median(vals))
        agg.append(out)
    return agg

def plot_runtime_vs_k(rows, out_png):
    pts = median_by_key(rows, ["variant", "k"])
    if not pts: return None
    by_variant = defaultdict(list)
    for r in pts:
        by_variant[r["variant"]].append((r["k"], r["wall_ms"]))
    n = max(r["qubits"] for r in rows)
    plt.figure()
    for variant, p in sorted(by_variant.items()):
        xs, ys = zip(*sorted(p))
        plt.plot(xs, ys, marker="o", label=variant)
    plt.xlabel("Target qubit (k)")
    plt.ylabel("Runtime (ms)")
    plt.title(f"Single-qubit kernel runtime [n={n}]")
    plt.grid(True)
    plt.legend()
    plt.savefig(out_png, dpi=200)
    plt.close()
    return out_png

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: python -m iqs.plot_results <csv> [<csv> ...]")
        return 1
    for path in argv:
        out_png = os.path.splitext(path)[0] + ".png"
        if plot_runtime_vs_k(load_rows(path), out_png):
            print(f"wrote {out_png}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
