import csv
from statistics import mean, median
from typing import Any, Dict, List

import matplotlib.pyplot as plt

NUMERIC_COLUMNS = ("total_cost", "steps", "turns", "settled_states", "time_sec")


def _read_rows(files: List[str]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for path in files:
        with open(path, "r", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row in reader:
                row["reachable"] = str(row.get("reachable", "")).strip().lower() == "true"
                for k in NUMERIC_COLUMNS:
                    value = row.get(k)
                    # Unreachable runs carry no cost; leave them out of the stats.
                    row[k] = float(value) if value not in (None, "") else None
                rows.append(row)
    return rows


def aggregate_by_algorithm(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for r in rows:
        groups.setdefault(str(r.get("algorithm", "")), []).append(r)
    out = []
    for algo, items in groups.items():
        summary: Dict[str, Any] = {
            "algorithm": algo,
            "count": len(items),
            "reachable": sum(1 for x in items if x.get("reachable")),
        }
        for name in NUMERIC_COLUMNS:
            values = [x[name] for x in items if x.get(name) is not None]
            summary[f"{name}_mean"] = mean(values) if values else 0.0
            summary[f"{name}_median"] = median(values) if values else 0.0
        out.append(summary)
    out.sort(key=lambda d: d["algorithm"])
    return out


def plot_summary_bar(csv_files: List[str], metric: str, use_median: bool, out_path: str, title: str = "Summary") -> None:
    if metric not in NUMERIC_COLUMNS:
        raise KeyError(f"Unknown metric {metric!r}; expected one of {NUMERIC_COLUMNS}")
    rows = _read_rows(csv_files)
    summary = aggregate_by_algorithm(rows)
    stat_key = f"{metric}_{'median' if use_median else 'mean'}"
    labels = [r["algorithm"] for r in summary]
    values = [float(r[stat_key]) for r in summary]
    fig, ax = plt.subplots(figsize=(max(6, len(labels) * 0.8), 4))
    bars = ax.bar(labels, values, color="#60a5fa")
    ax.set_title(title)
    ax.set_ylabel(stat_key.replace('_', ' '))
    ax.set_xticks(range(len(labels)))
    ax.set_xticklabels(labels, rotation=45, ha='right')
    for b in bars:
        h = b.get_height()
        ax.annotate(f"{h:.1f}", xy=(b.get_x() + b.get_width()/2, h), xytext=(0,3),
                    textcoords="offset points", ha='center', va='bottom', fontsize=8)
    plt.tight_layout()
    plt.savefig(out_path, bbox_inches='tight', dpi=150)
    plt.close(fig)
