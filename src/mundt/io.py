from __future__ import annotations

import csv
import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .host import HostModel


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def make_results_dir(case_name: str, root: Path | str = "results") -> Path:
    out = Path(root) / f"{utc_timestamp()}_{case_name}"
    out.mkdir(parents=True, exist_ok=True)
    return out


def current_git_commit() -> str:
    try:
        return subprocess.check_output(
            ["git", "rev-parse", "HEAD"], text=True, stderr=subprocess.DEVNULL
        ).strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"


def package_version() -> str:
    try:
        return version("mundt-stratification")
    except PackageNotFoundError:
        return "1.0.0"


def load_case_json(path: Path | str) -> HostModel:
    """Load a host case: zones, surfaces, air nodes and air-model settings."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return HostModel.from_dict(payload)


def save_case_json(host: HostModel, path: Path | str) -> None:
    Path(path).write_text(
        json.dumps(host.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
    )


def write_run_json(outdir: Path, params: dict, model_settings: dict) -> None:
    payload = {
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "git_commit": current_git_commit(),
        "python_version": sys.version,
        "package_version": package_version(),
        "platform": platform.platform(),
        "parameters": params,
        "model_settings": model_settings,
    }
    (outdir / "run.json").write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


SUMMARY_FIELDS = [
    "zone",
    "active",
    "coupling",
    "V_supply_m3s",
    "T_supply_C",
    "Q_cool_W",
    "T_floor_C",
    "T_ceiling_C",
    "T_control_C",
    "T_leaving_C",
    "slope_K_m",
    "slope_clamp",
]


def write_summary_csv(outdir: Path, results: list) -> None:
    nan = float("nan")
    rows = []
    for r in results:
        s = r.strat
        rows.append(
            {
                "zone": r.zone_name,
                "active": r.active,
                "coupling": r.coupling,
                "V_supply_m3s": r.scalars.supply_volume_rate,
                "T_supply_C": r.scalars.supply_temp,
                "Q_cool_W": r.scalars.cooling_load,
                "T_floor_C": s.t_floor if s else nan,
                "T_ceiling_C": s.t_ceiling if s else nan,
                "T_control_C": s.t_control if s else nan,
                "T_leaving_C": s.t_leaving if s else nan,
                "slope_K_m": s.slope if s else nan,
                "slope_clamp": s.slope_clamp if s else "",
            }
        )
    with (outdir / "summary.csv").open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=SUMMARY_FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def write_nodes_csv(outdir: Path, metas: dict[str, dict]) -> None:
    """One row per air node: "Room Air Node Air Temperature"."""
    with (outdir / "nodes.csv").open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=["zone", "node", "role", "height_m", "T_C"]
        )
        writer.writeheader()
        for zone_name, meta in metas.items():
            temps = meta.get("node_temperatures_C", {})
            for node in meta["nodes"]:
                writer.writerow(
                    {
                        "zone": zone_name,
                        "node": node["name"],
                        "role": node["role"],
                        "height_m": node["height_m"],
                        "T_C": temps.get(node["name"], float("nan")),
                    }
                )


def dump_meta_json(outdir: Path, filename: str, meta: dict) -> None:
    (outdir / filename).write_text(
        json.dumps(meta, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def write_validity_json(outdir: Path, stem: str, validity_flags: dict) -> Path:
    path = outdir / f"{stem}_validity.json"
    path.write_text(
        json.dumps(validity_flags, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return path


def print_validity_summary(validity_flags: dict) -> None:
    print("Validity flags:")
    for key, payload in validity_flags.items():
        status = payload.get("status", "n/a")
        msg = payload.get("message", "")
        print(f"  - {key}: {status} {msg}".rstrip())
