"""Closed-form Mundt stratification solve for one zone.

Equation numbers refer to the ASHRAE RP-1222 final report. The floor air
node sees a steady balance between supply-air advection and convection from
the floor surfaces; the leaving air carries the whole sensible load; a
linear profile with a bounded gradient joins the two.
"""

from __future__ import annotations

import logging

import numpy as np

from .cases import SolveContext, StratificationResult
from .constants import MAX_SLOPE, MIN_SLOPE

log = logging.getLogger(__name__)


def floor_air_temperature(ctx: SolveContext) -> tuple[float, float, float]:
    sc = ctx.scalars
    q_equip_floor = ctx.convective_floor_split * sc.conv_int_gain
    q_infil_floor = -ctx.infiltration_floor_split * sc.vent_gain
    rho_cp_v = sc.air_density * ctx.cp * sc.supply_volume_rate
    # Eq 2.2
    t_floor = (
        rho_cp_v * sc.supply_temp + ctx.floor.sum_hat + q_equip_floor + q_infil_floor
    ) / (rho_cp_v + ctx.floor.sum_ha)
    return t_floor, q_equip_floor, q_infil_floor


def leaving_air_temperature(ctx: SolveContext) -> float:
    sc = ctx.scalars
    if sc.cooling_load <= 0.0:
        return sc.supply_temp
    # Eq 2.3
    return sc.cooling_load / (sc.air_density * ctx.cp * sc.supply_volume_rate) + sc.supply_temp


def bounded_slope(
    t_leaving: float, t_floor: float, dh: float
) -> tuple[float, float, float, str]:
    """Return (slope, t_floor, raw_slope, clamp) with slope in [MIN_SLOPE, MAX_SLOPE]."""
    raw = (t_leaving - t_floor) / dh
    if raw > MAX_SLOPE:
        return MAX_SLOPE, t_leaving - MAX_SLOPE * dh, raw, "upper"
    if raw < MIN_SLOPE:
        # vertically uniform
        return MIN_SLOPE, t_leaving, raw, "lower"
    return raw, t_floor, raw, "none"


def solve_stratification(ctx: SolveContext) -> StratificationResult:
    nodes = ctx.topology.nodes
    roles = ctx.roles
    h_return = nodes[roles.return_].height
    h_floor = nodes[roles.floor].height

    t_floor, q_equip_floor, q_infil_floor = floor_air_temperature(ctx)
    t_leaving = leaving_air_temperature(ctx)
    slope, t_floor, raw, clamp = bounded_slope(t_leaving, t_floor, h_return - h_floor)
    if clamp != "none":
        log.debug(
            "Zone=%s: raw slope %.4g K/m clamped to %.4g K/m", ctx.topology.name, raw, slope
        )

    def t_at(h: float) -> float:
        # Eq 2.4
        return t_leaving - slope * (h_return - h)

    t_ceiling = t_at(nodes[roles.ceiling].height)
    t_control = t_at(nodes[roles.control].height)

    node_temps = np.full(len(nodes), np.nan)
    node_temps[roles.supply] = ctx.scalars.supply_temp
    node_temps[roles.return_] = t_leaving
    node_temps[roles.ceiling] = t_ceiling
    node_temps[roles.floor] = t_floor
    node_temps[roles.control] = t_control

    t_mean_air = np.full(ctx.n_surfaces, np.nan)
    assigned = np.zeros(ctx.n_surfaces, dtype=bool)

    def assign(surfaces: tuple[int, ...], value: float) -> None:
        idx = np.asarray(surfaces, dtype=int)
        t_mean_air[idx] = value
        assigned[idx] = True

    assign(roles.floor_surfaces, t_floor)
    assign(nodes[roles.ceiling].surfaces, t_ceiling)
    for i in roles.room:
        t_node = t_at(nodes[i].height)
        node_temps[i] = t_node
        assign(nodes[i].surfaces, t_node)

    return StratificationResult(
        t_supply=ctx.scalars.supply_temp,
        t_floor=t_floor,
        t_ceiling=t_ceiling,
        t_control=t_control,
        t_leaving=t_leaving,
        slope=slope,
        slope_raw=raw,
        slope_clamp=clamp,
        q_equip_floor=q_equip_floor,
        q_infil_floor=q_infil_floor,
        floor_sum_hat=ctx.floor.sum_hat,
        floor_sum_ha=ctx.floor.sum_ha,
        node_temps=node_temps,
        surface_t_mean_air=t_mean_air,
        surface_assigned=assigned,
    )
