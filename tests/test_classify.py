from dataclasses import replace

import pytest

from mundt.classify import classify_nodes
from mundt.errors import MundtConfigError, MundtFatalError
from mundt.gates import reference_topology
from mundt.presets import get_default_office_zone
from mundt.topology import AirNode, NodeRole, build_registry


def _without(topo, role: NodeRole):
    return replace(topo, nodes=tuple(n for n in topo.nodes if n.role is not role))


def test_office_roles():
    topo = build_registry(get_default_office_zone()).zones[0]
    roles = classify_nodes(topo)
    assert roles.supply == 0
    assert roles.floor == 1
    assert roles.control == 2
    assert roles.room == (3, 4)
    assert roles.ceiling == 5
    assert roles.return_ == 6
    assert roles.floor_surfaces == (0,)


def test_classification_is_idempotent():
    topo = reference_topology()
    assert classify_nodes(topo) == classify_nodes(topo)


def test_room_nodes_keep_discovery_order():
    topo = reference_topology()
    extra = AirNode("room_low", NodeRole.ROOM, 0.5, (False, False, False), ())
    topo = replace(topo, nodes=topo.nodes + (extra,))
    assert classify_nodes(topo).room == (3, 6)


def test_missing_floor_node_is_fatal():
    with pytest.raises(MundtFatalError, match="no FloorAirNode"):
        classify_nodes(_without(reference_topology(), NodeRole.FLOOR))


def test_missing_ceiling_node_is_fatal():
    with pytest.raises(MundtFatalError) as exc:
        classify_nodes(_without(reference_topology(), NodeRole.CEILING))
    assert any("no ceiling air node" in m for m in exc.value.severe)


def test_duplicate_control_node_is_fatal():
    topo = reference_topology()
    dup = AirNode("control2", NodeRole.CONTROL, 1.7, (False, False, False), ())
    with pytest.raises(MundtFatalError) as exc:
        classify_nodes(replace(topo, nodes=topo.nodes + (dup,)))
    assert any("several control air nodes" in m for m in exc.value.severe)


def test_return_at_floor_height_is_rejected():
    topo = reference_topology()
    nodes = tuple(
        replace(n, height=0.0) if n.role is NodeRole.RETURN else n for n in topo.nodes
    )
    with pytest.raises(MundtConfigError, match="different heights"):
        classify_nodes(replace(topo, nodes=nodes))
