from __future__ import annotations

from .constants import AIR_MODEL_MUNDT, COUPLING_DIRECT, P0
from .host import HostAirNode, HostModel, HostSurface, HostZone, SystemNode, ZoneAirModel

_OFFICE_SURFACES = (
    # name, area [m2], inside temperature [C], hc [W/m2K]
    ("Floor", 30.0, 22.0, 1.0),
    ("Ceiling", 30.0, 25.5, 2.0),
    ("North_Lower", 7.5, 23.0, 2.5),
    ("East_Lower", 9.0, 23.0, 2.5),
    ("South_Lower", 7.5, 23.5, 2.5),
    ("West_Lower", 9.0, 23.0, 2.5),
    ("North_Upper", 7.5, 24.5, 2.5),
    ("East_Upper", 9.0, 24.5, 2.5),
    ("South_Upper", 7.5, 25.0, 2.5),
    ("West_Upper", 9.0, 24.5, 2.5),
)


def _mask(n: int, owned: tuple[int, ...]) -> tuple[bool, ...]:
    return tuple(i in owned for i in range(n))


def get_default_office_zone(
    coupling: str = COUPLING_DIRECT,
    mass_flow: float = 0.3,
    t_supply: float = 14.0,
    mat: float = 24.0,
) -> HostModel:
    """Return a 5 m x 6 m x 3 m cooled office served by a single diffuser.

    Walls are split at 1.5 m; the lower and upper halves belong to two room
    air nodes so that the profile reaches every wall surface.
    """
    n = len(_OFFICE_SURFACES)
    surfaces = [
        HostSurface(name, area, temp_in=t, h_conv_in=hc)
        for name, area, t, hc in _OFFICE_SURFACES
    ]
    nodes = [
        HostAirNode("Office_Supply", "Office", "Inlet", 0.0, _mask(n, ())),
        HostAirNode("Office_Floor", "Office", "Floor", 0.1, _mask(n, (0,))),
        HostAirNode("Office_Control", "Office", "Control", 1.1, _mask(n, ())),
        HostAirNode("Office_Room_Lower", "Office", "MundtRoom", 0.75, _mask(n, (2, 3, 4, 5))),
        HostAirNode("Office_Room_Upper", "Office", "MundtRoom", 2.25, _mask(n, (6, 7, 8, 9))),
        HostAirNode("Office_Ceiling", "Office", "Ceiling", 2.9, _mask(n, (1,))),
        HostAirNode("Office_Return", "Office", "Return", 3.0, _mask(n, ())),
    ]
    zone = HostZone(
        name="Office",
        surface_first=0,
        n_surfaces=n,
        n_air_nodes=len(nodes),
        ceiling_height=3.0,
        floor_area=30.0,
        zone_node=SystemNode(temp=mat, mass_flow=mass_flow),
        inlet_nodes=[SystemNode(temp=t_supply, mass_flow=mass_flow)],
        mat=mat,
        zt=mat,
        hum_rat=0.008,
        out_dry_bulb=30.0,
        mcpi=5.0,
        internal_conv_gain=1500.0,
        tstat_setpoint=24.0,
    )
    am = ZoneAirModel(
        model=AIR_MODEL_MUNDT,
        coupling=coupling,
        convective_floor_split=0.2,
        infiltration_floor_split=0.1,
    )
    host = HostModel(
        zones=[zone],
        surfaces=surfaces,
        air_nodes=nodes,
        air_models=[am],
        out_baro_press=P0,
    )
    host.validate()
    return host
