from __future__ import annotations

import numpy as np

from .cases import StratificationResult, ZoneScalars
from .constants import MAX_SLOPE, MIN_SLOPE
from .topology import NodeRole, ZoneTopology


def _slope_flag(strat: StratificationResult) -> dict:
    if strat.slope_clamp == "upper":
        return {
            "status": "warning",
            "slope_K_m": strat.slope,
            "slope_raw_K_m": strat.slope_raw,
            "message": f"Raw gradient above {MAX_SLOPE} K/m; floor temperature recomputed from clamped slope",
        }
    if strat.slope_clamp == "lower":
        return {
            "status": "warning",
            "slope_K_m": strat.slope,
            "slope_raw_K_m": strat.slope_raw,
            "message": f"Raw gradient below {MIN_SLOPE} K/m; zone treated as vertically uniform",
        }
    return {"status": "ok", "slope_K_m": strat.slope, "slope_raw_K_m": strat.slope_raw}


def _floor_coupling_flag(strat: StratificationResult) -> dict:
    if strat.floor_sum_ha <= 0.0:
        return {
            "status": "warning",
            "sum_HA_W_K": strat.floor_sum_ha,
            "message": "No convective exchange with floor surfaces; floor air equals supply balance",
        }
    return {"status": "ok", "sum_HA_W_K": strat.floor_sum_ha}


def _state_flag(strat: StratificationResult) -> dict:
    temps = np.asarray(strat.node_temps, dtype=float)
    if np.any(~np.isfinite(temps)):
        return {"status": "fail", "message": "NaN/Inf detected in node temperatures"}
    assigned = strat.surface_t_mean_air[strat.surface_assigned]
    if np.any(~np.isfinite(assigned)):
        return {"status": "fail", "message": "NaN/Inf detected in surface air temperatures"}
    return {
        "status": "ok",
        "min_T_C": float(np.min(temps)),
        "max_T_C": float(np.max(temps)),
    }


def _monotonic_flag(topo: ZoneTopology, strat: StratificationResult) -> dict:
    pairs = sorted(
        (n.height, float(strat.node_temps[i]))
        for i, n in enumerate(topo.nodes)
        if n.role is not NodeRole.SUPPLY
    )
    heights = np.array([h for h, _ in pairs])
    d = np.diff([t for _, t in pairs])
    # a uniform zone keeps T_floor = T_leaving under the minimum slope
    tol = MIN_SLOPE * float(np.ptp(heights)) + 1e-9 if heights.size else 1e-9
    if np.all(d >= -tol) or np.all(d <= tol):
        return {"status": "ok"}
    return {"status": "fail", "message": "Node temperatures are not monotone in height"}


def _height_flag(topo: ZoneTopology, scalars: ZoneScalars) -> dict:
    outside = [
        n.name
        for n in topo.nodes
        if n.role is not NodeRole.SUPPLY and not (0.0 <= n.height <= scalars.zone_height + 1e-9)
    ]
    if outside:
        return {
            "status": "warning",
            "nodes": outside,
            "message": "Air nodes located outside the floor-to-ceiling range",
        }
    return {"status": "ok"}


def evaluate_validity_flags(
    topo: ZoneTopology, scalars: ZoneScalars, strat: StratificationResult | None
) -> dict:
    if strat is None:
        return {
            "regime": {
                "status": "ok",
                "active": False,
                "message": "Supply flow or cooling load below threshold; well-mixed air used",
            }
        }
    return {
        "regime": {"status": "ok", "active": True},
        "state_integrity": _state_flag(strat),
        "slope_bounds": _slope_flag(strat),
        "floor_coupling": _floor_coupling_flag(strat),
        "profile_monotonic": _monotonic_flag(topo, strat),
        "node_heights": _height_flag(topo, scalars),
    }
