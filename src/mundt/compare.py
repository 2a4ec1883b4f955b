from __future__ import annotations

import csv
import json
from pathlib import Path


def load_run(run_dir: Path) -> dict:
    """Load metadata and node table artifacts from a results directory."""
    if not run_dir.exists() or not run_dir.is_dir():
        raise FileNotFoundError(f"Run directory not found: {run_dir}")
    meta_files = sorted(run_dir.glob("*_meta.json"))
    if not meta_files:
        raise FileNotFoundError(f"No *_meta.json file found in {run_dir}")
    meta = json.loads(meta_files[0].read_text(encoding="utf-8"))

    nodes = []
    nodes_path = run_dir / "nodes.csv"
    if nodes_path.exists():
        with nodes_path.open("r", encoding="utf-8") as fh:
            nodes = list(csv.DictReader(fh))

    return {
        "dir": run_dir,
        "name": meta_files[0].name.removesuffix("_meta.json"),
        "meta": meta,
        "nodes": nodes,
    }


def compare_runs(run_a: dict, run_b: dict) -> dict:
    """Compare node temperatures and profile slopes zone by zone."""
    zones_a = run_a["meta"].get("zones", {})
    zones_b = run_b["meta"].get("zones", {})

    zone_deltas = {}
    for zone in sorted(set(zones_a) & set(zones_b)):
        ta = zones_a[zone].get("node_temperatures_C", {})
        tb = zones_b[zone].get("node_temperatures_C", {})
        node_deltas = {
            name: float(tb[name]) - float(ta[name]) for name in ta if name in tb
        }
        pa = zones_a[zone].get("profile", {})
        pb = zones_b[zone].get("profile", {})
        zone_deltas[zone] = {
            "active_a": zones_a[zone].get("active"),
            "active_b": zones_b[zone].get("active"),
            "delta_slope_K_m": (
                float(pb["slope_K_m"]) - float(pa["slope_K_m"])
                if "slope_K_m" in pa and "slope_K_m" in pb
                else float("nan")
            ),
            "node_deltas_K": node_deltas,
            "max_abs_node_delta_K": max((abs(v) for v in node_deltas.values()), default=0.0),
        }

    return {
        "run_a": run_a["name"],
        "run_b": run_b["name"],
        "only_in_a": sorted(set(zones_a) - set(zones_b)),
        "only_in_b": sorted(set(zones_b) - set(zones_a)),
        "zone_deltas": zone_deltas,
    }
