from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .cases import FloorSurfaceSet, SolveContext, ZoneScalars
from .classify import classify_nodes
from .constants import CP_AIR, MAX_SLOPE
from .solver import solve_stratification
from .topology import AirNode, NodeRole, ZoneTopology


@dataclass(frozen=True)
class GateMetrics:
    errSlope: float
    errCeiling: float
    errRoom: float
    errUpper: float
    errLower: float


def reference_topology(h_room: float = 1.5) -> ZoneTopology:
    """Floor at 0 m, ceiling and return at 3 m, one room node at `h_room`."""
    nodes = (
        AirNode("supply", NodeRole.SUPPLY, 0.0, (False, False, False), ()),
        AirNode("floor", NodeRole.FLOOR, 0.0, (True, False, False), (0,)),
        AirNode("control", NodeRole.CONTROL, 1.1, (False, False, False), ()),
        AirNode("room", NodeRole.ROOM, h_room, (False, True, False), (1,)),
        AirNode("ceiling", NodeRole.CEILING, 3.0, (False, False, True), (2,)),
        AirNode("return", NodeRole.RETURN, 3.0, (False, False, False), ()),
    )
    return ZoneTopology("reference", 0, 0, 0, 3, nodes)


def reference_context(
    t_supply: float = 14.0,
    t_leaving: float = 18.0,
    t_floor: float = 16.0,
    rho: float = 1.2,
    v: float = 0.1,
) -> SolveContext:
    """Context whose balance gives exactly `t_leaving` and `t_floor`.

    The floor surface exchanges nothing (hc = 0); the floor gain is supplied
    entirely by the convective split of internal gains.
    """
    topo = reference_topology()
    rho_cp_v = rho * CP_AIR * v
    scalars = ZoneScalars(
        supply_volume_rate=v,
        supply_temp=t_supply,
        cooling_load=(t_leaving - t_supply) * rho_cp_v,
        conv_int_gain=(t_floor - t_supply) * rho_cp_v,
        vent_gain=0.0,
        air_density=rho,
        zone_height=3.0,
        floor_area=20.0,
    )
    return SolveContext(
        topology=topo,
        roles=classify_nodes(topo),
        scalars=scalars,
        floor=FloorSurfaceSet(np.array([20.0]), np.array([0.0]), np.array([20.0])),
        convective_floor_split=1.0,
        infiltration_floor_split=0.0,
        n_surfaces=3,
    )


def gate_reference() -> GateMetrics:
    res = solve_stratification(reference_context())
    err_slope = abs(res.slope - 2.0 / 3.0)
    err_ceiling = abs(res.t_ceiling - 18.0)
    err_room = abs(res.surface_t_mean_air[1] - 17.0)

    # raw slope (30 - 14) / 3 > MAX_SLOPE
    up = solve_stratification(reference_context(t_leaving=30.0, t_floor=14.0))
    err_upper = abs((up.t_leaving - up.t_floor) - MAX_SLOPE * 3.0)

    # floor warmer than leaving air: negative raw slope
    lo = solve_stratification(reference_context(t_leaving=18.0, t_floor=19.0))
    err_lower = abs(lo.t_floor - lo.t_leaving)

    return GateMetrics(
        errSlope=err_slope,
        errCeiling=err_ceiling,
        errRoom=err_room,
        errUpper=err_upper,
        errLower=err_lower,
    )
