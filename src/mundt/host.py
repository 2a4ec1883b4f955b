"""Host (facility) data exchanged with the Mundt model.

These dataclasses stand in for the building-physics program around the
model: zone geometry and flags, surfaces with their inside heat-balance
state, facility-level room-air node definitions, per-zone air-model
settings and the system nodes that deliver supply air. Fields under the
``# outputs`` comments are written by the bridge.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from .constants import (
    AIR_MODEL_MIXING,
    AIR_MODEL_MUNDT,
    COUPLING_DIRECT,
    COUPLING_INDIRECT,
    P0,
    T_INIT,
    TAIR_REF_ZONE_MEAN,
)

ALLOWED_AIR_MODEL = {AIR_MODEL_MUNDT, AIR_MODEL_MIXING}
ALLOWED_COUPLING = {COUPLING_DIRECT, COUPLING_INDIRECT}


@dataclass
class SystemNode:
    temp: float = T_INIT
    mass_flow: float = 0.0


@dataclass
class HostSurface:
    name: str
    area: float
    temp_in: float = T_INIT
    h_conv_in: float = 0.0
    # outputs
    t_eff_bulk_air: float = T_INIT
    t_air_ref: str = TAIR_REF_ZONE_MEAN


@dataclass
class HostAirNode:
    name: str
    zone_name: str
    role: str
    height: float
    surf_mask: tuple[bool, ...] = ()


@dataclass
class ZoneAirModel:
    model: str = AIR_MODEL_MIXING
    coupling: str = COUPLING_DIRECT
    convective_floor_split: float = 0.0
    infiltration_floor_split: float = 0.0
    # outputs
    sim_air_model: bool = False

    def validate(self) -> None:
        if self.model not in ALLOWED_AIR_MODEL:
            raise ValueError(f"air model must be one of {sorted(ALLOWED_AIR_MODEL)}")
        if self.coupling not in ALLOWED_COUPLING:
            raise ValueError(f"coupling must be one of {sorted(ALLOWED_COUPLING)}")
        for name in ("convective_floor_split", "infiltration_floor_split"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")


@dataclass
class HostZone:
    name: str
    surface_first: int
    n_surfaces: int
    n_air_nodes: int
    ceiling_height: float
    floor_area: float
    multiplier: float = 1.0
    list_multiplier: float = 1.0
    is_controlled: bool = True
    no_heat_to_return_air: bool = False
    zone_node: SystemNode = field(default_factory=SystemNode)
    inlet_nodes: list[SystemNode] = field(default_factory=list)

    # state supplied by the heat balance for the current step
    mat: float = T_INIT
    zt: float = T_INIT
    hum_rat: float = 0.008
    out_dry_bulb: float = T_INIT
    mcpi: float = 0.0
    internal_conv_gain: float = 0.0
    return_air_conv_gain: float = 0.0
    sum_conv_ht_rad_sys: float = 0.0
    sum_conv_pool: float = 0.0
    sys_dep_zone_loads_lagged: float = 0.0
    non_air_system_response: float = 0.0
    tstat_setpoint: float = T_INIT

    # outputs
    t_tstat_air: float = T_INIT
    avg_air_temp: float | None = None

    def validate(self) -> None:
        if self.n_surfaces <= 0:
            raise ValueError(f"zone {self.name}: n_surfaces must be > 0")
        if self.surface_first < 0:
            raise ValueError(f"zone {self.name}: surface_first must be >= 0")
        if self.n_air_nodes < 0:
            raise ValueError(f"zone {self.name}: n_air_nodes must be >= 0")
        for name in ("ceiling_height", "floor_area", "multiplier", "list_multiplier"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"zone {self.name}: {name} must be > 0")

    @property
    def total_multiplier(self) -> float:
        return self.multiplier * self.list_multiplier


@dataclass
class HostModel:
    zones: list[HostZone]
    surfaces: list[HostSurface]
    air_nodes: list[HostAirNode]
    air_models: list[ZoneAirModel]
    out_baro_press: float = P0

    def validate(self) -> None:
        if len(self.air_models) != len(self.zones):
            raise ValueError(
                f"air_models length mismatch: expected {len(self.zones)}, "
                f"got {len(self.air_models)}"
            )
        if self.out_baro_press <= 0.0:
            raise ValueError("out_baro_press must be > 0")
        for zone in self.zones:
            zone.validate()
            if zone.surface_first + zone.n_surfaces > len(self.surfaces):
                raise ValueError(f"zone {zone.name}: surface range exceeds surface list")
        for am in self.air_models:
            am.validate()

    def zone_surfaces(self, zone_index: int) -> list[HostSurface]:
        zone = self.zones[zone_index]
        return self.surfaces[zone.surface_first : zone.surface_first + zone.n_surfaces]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict) -> HostModel:
        zones = []
        for z in payload["zones"]:
            z = dict(z)
            z["zone_node"] = SystemNode(**z.get("zone_node", {}))
            z["inlet_nodes"] = [SystemNode(**n) for n in z.get("inlet_nodes", [])]
            zones.append(HostZone(**z))
        air_nodes = []
        for n in payload.get("air_nodes", []):
            n = dict(n)
            n["surf_mask"] = tuple(bool(v) for v in n.get("surf_mask", ()))
            air_nodes.append(HostAirNode(**n))
        model = cls(
            zones=zones,
            surfaces=[HostSurface(**s) for s in payload["surfaces"]],
            air_nodes=air_nodes,
            air_models=[ZoneAirModel(**m) for m in payload.get("air_models", [])],
            out_baro_press=float(payload.get("out_baro_press", P0)),
        )
        model.validate()
        return model
