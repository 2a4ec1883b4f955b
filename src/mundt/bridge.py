from __future__ import annotations

import logging

from .cases import StratificationResult, ZoneScalars
from .constants import (
    ACTIVE_THRESHOLD,
    COUPLING_DIRECT,
    SYSTEM_OFF_MDOT,
    TAIR_REF_ADJACENT,
    TAIR_REF_ZONE_MEAN,
)
from .errors import MundtFatalError
from .host import HostModel
from .psychrometrics import cp_air, hum_rat_from_dewpoint, rho_air
from .topology import TopologyRegistry, ZoneTopology

log = logging.getLogger(__name__)


def is_active(scalars: ZoneScalars) -> bool:
    return (
        scalars.supply_volume_rate > ACTIVE_THRESHOLD
        and scalars.cooling_load > ACTIVE_THRESHOLD
    )


def _supply_conditions(host: HostModel, zone_index: int) -> tuple[float, float]:
    """Mass-flow weighted supply temperature and sensible cooling load."""
    zone = host.zones[zone_index]
    m_zone = zone.zone_node.mass_flow
    first_inlet = zone.inlet_nodes[0].temp if zone.inlet_nodes else zone.mat
    if m_zone <= SYSTEM_OFF_MDOT:
        return first_inlet, 0.0

    sum_mcp = 0.0
    sum_mcpt = 0.0
    for inlet in zone.inlet_nodes:
        cp = cp_air(zone.hum_rat, inlet.temp)
        sum_mcp += inlet.mass_flow * cp
        sum_mcpt += inlet.mass_flow * cp * inlet.temp
    if sum_mcp <= 0.0:
        t_supply = first_inlet
    else:
        t_supply = sum_mcpt / sum_mcp
    cp_zone = cp_air(zone.hum_rat, zone.mat)
    q_cool = -(sum_mcpt - m_zone * cp_zone * zone.mat)
    return t_supply, q_cool


def _convective_gain(host: HostModel, zone_index: int) -> float:
    zone = host.zones[zone_index]
    q = (
        zone.internal_conv_gain
        + zone.sum_conv_ht_rad_sys
        + zone.sum_conv_pool
        + zone.sys_dep_zone_loads_lagged
        + zone.non_air_system_response / zone.total_multiplier
    )
    if zone.no_heat_to_return_air:
        q += zone.return_air_conv_gain
    return q


def pull_from_host(
    host: HostModel, zone_index: int, registry: TopologyRegistry | None = None
) -> ZoneScalars:
    """Map host zone/surface state into model inputs.

    When ``registry`` is given, the zone's surface temperature and convection
    coefficient tables are refreshed as well.
    """
    zone = host.zones[zone_index]
    if not zone.is_controlled:
        msg = f"Zones must be controlled for Mundt air model. No system serves zone {zone.name}"
        log.critical(msg)
        raise MundtFatalError(msg)

    pb = host.out_baro_press
    rho = rho_air(pb, zone.mat, hum_rat_from_dewpoint(zone.mat, pb))
    t_supply, q_cool = _supply_conditions(host, zone_index)
    scalars = ZoneScalars(
        supply_volume_rate=zone.zone_node.mass_flow / rho,
        supply_temp=t_supply,
        cooling_load=q_cool,
        conv_int_gain=_convective_gain(host, zone_index),
        vent_gain=-zone.mcpi * (zone.out_dry_bulb - zone.mat),
        air_density=rho,
        zone_height=zone.ceiling_height,
        floor_area=zone.floor_area,
    )

    if registry is not None:
        topo = registry.topology_for(zone_index)
        for s, surf in enumerate(host.zone_surfaces(zone_index)):
            registry.temp[topo.mundt_index, s] = surf.temp_in
            registry.hc[topo.mundt_index, s] = surf.h_conv_in
    return scalars


def push_well_mixed(host: HostModel, zone_index: int) -> None:
    """Hand the zone back to the host as well-mixed air at MAT.

    Every output a stratified step may have written is reset, so nothing
    from an earlier active step survives an inactive one.
    """
    zone = host.zones[zone_index]
    for surf in host.zone_surfaces(zone_index):
        surf.t_eff_bulk_air = zone.mat
        surf.t_air_ref = TAIR_REF_ZONE_MEAN
    zone.avg_air_temp = None
    zone.zone_node.temp = zone.mat
    zone.t_tstat_air = zone.mat
    host.air_models[zone_index].sim_air_model = False


def push_to_host(
    host: HostModel,
    zone_index: int,
    registry: TopologyRegistry,
    topo: ZoneTopology,
    strat: StratificationResult,
) -> None:
    """Write stratified air temperatures back to the host.

    Direct coupling hands over absolute temperatures. Indirect coupling hands
    over offsets from the control point added to the thermostat set point,
    and leaves the host's zone average untouched.
    """
    zone = host.zones[zone_index]
    am = host.air_models[zone_index]
    mi = topo.mundt_index
    t_mean_air = registry.t_mean_air[mi, : topo.n_surfaces]
    surfaces = host.zone_surfaces(zone_index)

    if am.coupling == COUPLING_DIRECT:
        for s, surf in enumerate(surfaces):
            surf.t_eff_bulk_air = float(t_mean_air[s])
            surf.t_air_ref = TAIR_REF_ADJACENT
        zone.avg_air_temp = strat.t_room_average
        zone.zone_node.temp = strat.t_leaving
        zone.t_tstat_air = strat.t_control
    else:
        setpoint = zone.tstat_setpoint
        for s, surf in enumerate(surfaces):
            surf.t_eff_bulk_air = setpoint + float(t_mean_air[s]) - strat.t_control
            surf.t_air_ref = TAIR_REF_ADJACENT
        zone.zone_node.temp = setpoint + strat.t_leaving - strat.t_control
        zone.t_tstat_air = zone.zt
    am.sim_air_model = True
