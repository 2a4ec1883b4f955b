from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .classify import NodeRoles
from .constants import CP_AIR
from .topology import ZoneTopology


@dataclass(frozen=True)
class ZoneScalars:
    supply_volume_rate: float
    supply_temp: float
    cooling_load: float
    conv_int_gain: float
    vent_gain: float
    air_density: float
    zone_height: float
    floor_area: float


@dataclass(frozen=True)
class FloorSurfaceSet:
    area: np.ndarray
    hc: np.ndarray
    temp: np.ndarray

    @classmethod
    def gather(
        cls, area: np.ndarray, hc: np.ndarray, temp: np.ndarray, ids: tuple[int, ...]
    ) -> FloorSurfaceSet:
        idx = np.asarray(ids, dtype=int)
        return cls(area=area[idx].copy(), hc=hc[idx].copy(), temp=temp[idx].copy())

    @property
    def sum_hat(self) -> float:
        return float(np.sum(self.area * self.hc * self.temp))

    @property
    def sum_ha(self) -> float:
        return float(np.sum(self.area * self.hc))


@dataclass(frozen=True)
class SolveContext:
    topology: ZoneTopology
    roles: NodeRoles
    scalars: ZoneScalars
    floor: FloorSurfaceSet
    convective_floor_split: float
    infiltration_floor_split: float
    n_surfaces: int
    cp: float = CP_AIR


@dataclass
class StratificationResult:
    t_supply: float
    t_floor: float
    t_ceiling: float
    t_control: float
    t_leaving: float
    slope: float
    slope_raw: float
    slope_clamp: str  # none|upper|lower
    q_equip_floor: float
    q_infil_floor: float
    floor_sum_hat: float
    floor_sum_ha: float
    node_temps: np.ndarray
    surface_t_mean_air: np.ndarray
    surface_assigned: np.ndarray

    @property
    def t_room_average(self) -> float:
        return 0.5 * (self.t_ceiling + self.t_floor)


@dataclass
class ZoneStepResult:
    zone_name: str
    host_index: int
    mundt_index: int
    active: bool
    scalars: ZoneScalars
    strat: StratificationResult | None
    coupling: str
