from __future__ import annotations

from dataclasses import asdict

from .cases import ZoneStepResult
from .host import HostModel
from .topology import TopologyRegistry
from .validity import evaluate_validity_flags


def summarize_result(host: HostModel, registry: TopologyRegistry, res: ZoneStepResult) -> dict:
    topo = registry.topology_for(res.host_index)
    zone = host.zones[res.host_index]
    surfaces = host.zone_surfaces(res.host_index)

    meta = {
        "zone": res.zone_name,
        "active": res.active,
        "coupling": res.coupling,
        "scalars": asdict(res.scalars),
        "nodes": [
            {"name": n.name, "role": n.role.value, "height_m": n.height, "surfaces": list(n.surfaces)}
            for n in topo.nodes
        ],
        "surfaces": [
            {
                "name": s.name,
                "area_m2": s.area,
                "T_surface_C": s.temp_in,
                "h_conv_W_m2K": s.h_conv_in,
                "T_eff_air_C": s.t_eff_bulk_air,
                "T_air_ref": s.t_air_ref,
            }
            for s in surfaces
        ],
        "zone_node_T_C": zone.zone_node.temp,
        "tstat_air_T_C": zone.t_tstat_air,
        "validity_flags": evaluate_validity_flags(topo, res.scalars, res.strat),
    }
    if res.strat is not None:
        s = res.strat
        meta["node_temperatures_C"] = registry.node_temperatures(res.mundt_index)
        meta["profile"] = {
            "T_supply_C": s.t_supply,
            "T_floor_C": s.t_floor,
            "T_ceiling_C": s.t_ceiling,
            "T_control_C": s.t_control,
            "T_leaving_C": s.t_leaving,
            "T_room_average_C": s.t_room_average,
            "slope_K_m": s.slope,
            "slope_raw_K_m": s.slope_raw,
            "slope_clamp": s.slope_clamp,
            "Q_equip_floor_W": s.q_equip_floor,
            "Q_infil_floor_W": s.q_infil_floor,
        }
    return meta
