from __future__ import annotations

import copy
import csv
import json
from dataclasses import replace
from pathlib import Path

import numpy as np

from .host import HostModel
from .run import MundtModel

_METRICS = ("slope_K_m", "T_floor_C", "T_control_C", "T_leaving_C")


def run_mc(
    host_base: HostModel,
    zone_index: int,
    conv_split_range: tuple[float, float],
    infil_split_range: tuple[float, float],
    supply_dt_range: tuple[float, float],
    n_samples: int,
    seed: int | None = None,
) -> dict:
    """Monte Carlo sweep over floor-split and supply-temperature uncertainty."""
    rng = np.random.default_rng(seed)
    samples = []
    values: dict[str, list[float]] = {k: [] for k in _METRICS}

    for i in range(n_samples):
        conv = float(rng.uniform(*conv_split_range))
        infil = float(rng.uniform(*infil_split_range))
        dt = float(rng.uniform(*supply_dt_range))

        host = copy.deepcopy(host_base)
        host.air_models[zone_index] = replace(
            host.air_models[zone_index],
            convective_floor_split=conv,
            infiltration_floor_split=infil,
        )
        for inlet in host.zones[zone_index].inlet_nodes:
            inlet.temp += dt
        res = MundtModel(host).run(zone_index)

        row = {
            "sample": i,
            "convective_floor_split": conv,
            "infiltration_floor_split": infil,
            "supply_dT_K": dt,
            "active": res.active,
        }
        s = res.strat
        nan = float("nan")
        metrics = {
            "slope_K_m": s.slope if s else nan,
            "T_floor_C": s.t_floor if s else nan,
            "T_control_C": s.t_control if s else nan,
            "T_leaving_C": s.t_leaving if s else nan,
        }
        for key, value in metrics.items():
            row[key] = float(value)
            values[key].append(float(value))
        samples.append(row)

    summary = {}
    for key, vals in values.items():
        arr = np.asarray(vals, dtype=float)
        arr = arr[np.isfinite(arr)]
        if not arr.size:
            continue
        summary[key] = {
            "mean": float(np.mean(arr)),
            "std": float(np.std(arr)),
            "p5": float(np.percentile(arr, 5)),
            "p50": float(np.percentile(arr, 50)),
            "p95": float(np.percentile(arr, 95)),
        }

    return {"samples": samples, "summary": summary}


def write_mc_outputs(result: dict, outdir: Path) -> None:
    outdir.mkdir(parents=True, exist_ok=True)
    sample_rows = result["samples"]
    if sample_rows:
        cols = list(sample_rows[0].keys())
        with (outdir / "mc_results.csv").open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=cols)
            writer.writeheader()
            writer.writerows(sample_rows)
    (outdir / "mc_summary.json").write_text(
        json.dumps(result["summary"], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
