from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import ErrorCollector, MundtConfigError, MundtFatalError
from .topology import NodeRole, ZoneTopology

log = logging.getLogger(__name__)

_SINGLETON_ROLES = (
    NodeRole.SUPPLY,
    NodeRole.FLOOR,
    NodeRole.CEILING,
    NodeRole.CONTROL,
    NodeRole.RETURN,
)


@dataclass(frozen=True)
class NodeRoles:
    """Node indices of one zone, bucketed by role."""

    supply: int
    floor: int
    ceiling: int
    control: int
    return_: int
    room: tuple[int, ...]
    floor_surfaces: tuple[int, ...]


def classify_nodes(topo: ZoneTopology) -> NodeRoles:
    found: dict[NodeRole, list[int]] = {role: [] for role in _SINGLETON_ROLES}
    room: list[int] = []
    for i, node in enumerate(topo.nodes):
        match node.role:
            case NodeRole.SUPPLY | NodeRole.FLOOR | NodeRole.CEILING | NodeRole.CONTROL | NodeRole.RETURN:
                found[node.role].append(i)
            case NodeRole.ROOM:
                room.append(i)

    if not found[NodeRole.FLOOR]:
        msg = f"SetupMundtModel: Mundt model has no FloorAirNode, Zone={topo.name}"
        log.critical(msg)
        raise MundtFatalError(msg)

    errors = ErrorCollector(log)
    for role, indices in found.items():
        if not indices:
            errors.severe(f"SetupMundtModel: Mundt model has no {role.value} air node, Zone={topo.name}")
        elif len(indices) > 1:
            names = ", ".join(topo.nodes[i].name for i in indices)
            errors.severe(
                f"SetupMundtModel: Zone={topo.name} has several {role.value} air nodes: {names}"
            )
    errors.raise_if_errors("ManageMundtModel: Errors in setting up Mundt Model. Preceding condition(s) cause termination.")

    floor = found[NodeRole.FLOOR][0]
    ret = found[NodeRole.RETURN][0]
    if topo.nodes[ret].height == topo.nodes[floor].height:
        raise MundtConfigError(
            f"Zone={topo.name}: return air node and floor air node must be at different heights"
        )
    return NodeRoles(
        supply=found[NodeRole.SUPPLY][0],
        floor=floor,
        ceiling=found[NodeRole.CEILING][0],
        control=found[NodeRole.CONTROL][0],
        return_=ret,
        room=tuple(room),
        floor_surfaces=topo.nodes[floor].surfaces,
    )
