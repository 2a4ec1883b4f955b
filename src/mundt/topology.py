from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .constants import AIR_MODEL_MUNDT, T_INIT
from .errors import ErrorCollector, MundtConfigError
from .host import HostAirNode, HostModel, HostZone

log = logging.getLogger(__name__)


class NodeRole(Enum):
    SUPPLY = "supply"
    FLOOR = "floor"
    CEILING = "ceiling"
    CONTROL = "control"
    ROOM = "room"
    RETURN = "return"


_ROLE_NAMES = {
    "inlet": NodeRole.SUPPLY,
    "supply": NodeRole.SUPPLY,
    "floor": NodeRole.FLOOR,
    "ceiling": NodeRole.CEILING,
    "control": NodeRole.CONTROL,
    "thermostat": NodeRole.CONTROL,
    "mundtroom": NodeRole.ROOM,
    "room": NodeRole.ROOM,
    "return": NodeRole.RETURN,
}


def parse_role(value: str | NodeRole) -> NodeRole:
    if isinstance(value, NodeRole):
        return value
    key = str(value).strip().lower().replace("_", "").replace(" ", "")
    try:
        return _ROLE_NAMES[key]
    except KeyError:
        raise MundtConfigError(
            f"Non-Standard Type of Air Node for Mundt Model: {value!r}"
        ) from None


@dataclass(frozen=True)
class AirNode:
    name: str
    role: NodeRole
    height: float
    surf_mask: tuple[bool, ...]
    surfaces: tuple[int, ...]


@dataclass(frozen=True)
class ZoneTopology:
    name: str
    host_index: int
    mundt_index: int
    surface_first: int
    n_surfaces: int
    nodes: tuple[AirNode, ...]

    @property
    def n_room_nodes(self) -> int:
        return sum(1 for n in self.nodes if n.role is NodeRole.ROOM)

    @property
    def n_floor_surfaces(self) -> int:
        return sum(len(n.surfaces) for n in self.nodes if n.role is NodeRole.FLOOR)


@dataclass
class TopologyRegistry:
    """Static zone topologies plus the shared surface/node tables.

    Tables are indexed ``[mundt_index, local_index]`` and sized once from the
    maxima over every zone using the model. ``max_room_nodes`` and
    ``max_floor_surfaces`` size no table; they are reported at build time
    only. The per-call floor set and room node list are taken from the
    zone's own nodes.
    """

    zones: tuple[ZoneTopology, ...]
    by_host_index: dict[int, int]
    max_surfaces: int
    max_air_nodes: int
    max_room_nodes: int
    max_floor_surfaces: int
    area: np.ndarray
    hc: np.ndarray
    temp: np.ndarray
    t_mean_air: np.ndarray
    node_temps: np.ndarray

    def topology_for(self, host_index: int) -> ZoneTopology:
        try:
            return self.zones[self.by_host_index[host_index]]
        except KeyError:
            raise MundtConfigError(
                f"zone index {host_index} is not configured for the Mundt model"
            ) from None

    def node_temperatures(self, mundt_index: int) -> dict[str, float]:
        topo = self.zones[mundt_index]
        return {
            n.name: float(self.node_temps[mundt_index, i])
            for i, n in enumerate(topo.nodes)
        }


def _zone_node_map(air_nodes: list[HostAirNode]) -> dict[str, list[int]]:
    out: dict[str, list[int]] = {}
    for i, node in enumerate(air_nodes):
        out.setdefault(node.zone_name.upper(), []).append(i)
    return out


def _make_air_node(
    defn: HostAirNode, zone: HostZone, errors: ErrorCollector
) -> AirNode | None:
    try:
        role = parse_role(defn.role)
    except MundtConfigError as exc:
        errors.severe(f"{exc}, Node={defn.name}, Zone={zone.name}")
        return None
    mask = tuple(bool(v) for v in defn.surf_mask)
    if len(mask) != zone.n_surfaces:
        errors.severe(
            f"Air Node={defn.name} in Zone={zone.name}: surface mask length mismatch: "
            f"expected {zone.n_surfaces}, got {len(mask)}"
        )
        return None
    surfaces = tuple(i for i, flag in enumerate(mask) if flag)
    return AirNode(defn.name, role, float(defn.height), mask, surfaces)


def _check_surface_ownership(
    zone: HostZone, nodes: list[AirNode], errors: ErrorCollector
) -> None:
    owners: list[list[str]] = [[] for _ in range(zone.n_surfaces)]
    for node in nodes:
        for s in node.surfaces:
            owners[s].append(node.name)
    for s, names in enumerate(owners):
        if not names:
            errors.severe(f"Surface {s + 1} of Zone={zone.name} is not assigned to any air node")
        elif len(names) > 1:
            errors.severe(
                f"Surface {s + 1} of Zone={zone.name} is assigned to several air nodes: "
                + ", ".join(names)
            )


def discover_zone_nodes(
    host: HostModel, zone: HostZone, candidates: list[int]
) -> list[AirNode]:
    """Match the zone's declared air nodes against facility definitions.

    ``candidates`` holds the facility node indices belonging to the zone, in
    input order; a cursor walks it once per declared node.
    """
    errors = ErrorCollector(log)
    nodes: list[AirNode] = []
    cursor = 0
    for _ in range(zone.n_air_nodes):
        if cursor >= len(candidates):
            errors.severe(f'InitMundtModel: Air Node in Zone="{zone.name}" is not found.')
            continue
        defn = host.air_nodes[candidates[cursor]]
        cursor += 1
        node = _make_air_node(defn, zone, errors)
        if node is not None:
            nodes.append(node)
    if not errors.errors_found:
        _check_surface_ownership(zone, nodes, errors)
    errors.raise_if_errors("InitMundtModel: Preceding condition(s) cause termination.")
    return nodes


def build_registry(host: HostModel) -> TopologyRegistry:
    host.validate()
    node_map = _zone_node_map(host.air_nodes)

    zones: list[ZoneTopology] = []
    by_host_index: dict[int, int] = {}
    for zi, zone in enumerate(host.zones):
        if host.air_models[zi].model != AIR_MODEL_MUNDT:
            continue
        nodes = discover_zone_nodes(host, zone, node_map.get(zone.name.upper(), []))
        by_host_index[zi] = len(zones)
        zones.append(
            ZoneTopology(
                name=zone.name,
                host_index=zi,
                mundt_index=len(zones),
                surface_first=zone.surface_first,
                n_surfaces=zone.n_surfaces,
                nodes=tuple(nodes),
            )
        )

    max_surfaces = max((z.n_surfaces for z in zones), default=0)
    max_air_nodes = max((host.zones[z.host_index].n_air_nodes for z in zones), default=0)
    max_room_nodes = max((z.n_room_nodes for z in zones), default=0)
    max_floor_surfaces = max((z.n_floor_surfaces for z in zones), default=0)

    shape = (len(zones), max_surfaces)
    area = np.zeros(shape)
    for z in zones:
        for s, surf in enumerate(host.zone_surfaces(z.host_index)):
            area[z.mundt_index, s] = surf.area

    log.info(
        "Mundt topology: %d zone(s), max surfaces=%d, max air nodes=%d, "
        "max room nodes=%d, max floor surfaces=%d",
        len(zones),
        max_surfaces,
        max_air_nodes,
        max_room_nodes,
        max_floor_surfaces,
    )
    return TopologyRegistry(
        zones=tuple(zones),
        by_host_index=by_host_index,
        max_surfaces=max_surfaces,
        max_air_nodes=max_air_nodes,
        max_room_nodes=max_room_nodes,
        max_floor_surfaces=max_floor_surfaces,
        area=area,
        hc=np.zeros(shape),
        temp=np.full(shape, T_INIT),
        t_mean_air=np.full(shape, T_INIT),
        node_temps=np.full((len(zones), max_air_nodes), T_INIT),
    )
