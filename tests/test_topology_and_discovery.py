import numpy as np
import pytest

from mundt.errors import MundtConfigError, MundtFatalError
from mundt.host import HostAirNode, HostSurface, HostZone, SystemNode, ZoneAirModel
from mundt.presets import get_default_office_zone
from mundt.topology import NodeRole, build_registry, parse_role


def _add_lab_zone(host, model: str = "mundt"):
    first = len(host.surfaces)
    host.surfaces.extend(
        [
            HostSurface("Lab_Floor", 12.0),
            HostSurface("Lab_Ceiling", 12.0),
            HostSurface("Lab_North", 9.0),
            HostSurface("Lab_East", 12.0),
            HostSurface("Lab_South", 9.0),
            HostSurface("Lab_West", 12.0),
        ]
    )

    def mask(*owned):
        return tuple(i in owned for i in range(6))

    host.air_nodes.extend(
        [
            HostAirNode("Lab_Supply", "Lab", "Inlet", 0.0, mask()),
            HostAirNode("Lab_Floor", "Lab", "Floor", 0.1, mask(0)),
            HostAirNode("Lab_Control", "Lab", "Control", 1.2, mask()),
            HostAirNode("Lab_Room", "Lab", "MundtRoom", 1.5, mask(2, 3, 4, 5)),
            HostAirNode("Lab_Ceiling", "Lab", "Ceiling", 2.9, mask(1)),
            HostAirNode("Lab_Return", "Lab", "Return", 3.0, mask()),
        ]
    )
    host.zones.append(
        HostZone(
            name="Lab",
            surface_first=first,
            n_surfaces=6,
            n_air_nodes=6,
            ceiling_height=3.0,
            floor_area=12.0,
            zone_node=SystemNode(24.0, 0.1),
            inlet_nodes=[SystemNode(15.0, 0.1)],
            mat=24.0,
        )
    )
    host.air_models.append(ZoneAirModel(model=model, convective_floor_split=0.1))
    return host


def test_registry_sizes_for_office_preset():
    reg = build_registry(get_default_office_zone())
    assert len(reg.zones) == 1
    assert reg.max_surfaces == 10
    assert reg.max_air_nodes == 7
    assert reg.max_room_nodes == 2
    assert reg.max_floor_surfaces == 1
    assert reg.area.shape == (1, 10)
    assert reg.node_temps.shape == (1, 7)
    assert reg.area[0, 0] == 30.0
    assert np.all(reg.t_mean_air == 25.0)


def test_node_surfaces_are_explicit_indices():
    topo = build_registry(get_default_office_zone()).zones[0]
    by_name = {n.name: n for n in topo.nodes}
    assert by_name["Office_Floor"].surfaces == (0,)
    assert by_name["Office_Ceiling"].surfaces == (1,)
    assert by_name["Office_Room_Lower"].surfaces == (2, 3, 4, 5)
    assert by_name["Office_Return"].surfaces == ()
    assert by_name["Office_Room_Upper"].role is NodeRole.ROOM


def test_maxima_over_two_zones_and_dense_indices():
    reg = build_registry(_add_lab_zone(get_default_office_zone()))
    assert [z.name for z in reg.zones] == ["Office", "Lab"]
    assert reg.topology_for(1).mundt_index == 1
    assert reg.max_surfaces == 10
    assert reg.max_room_nodes == 2
    assert reg.area.shape == (2, 10)
    assert reg.area[1, 3] == 12.0
    assert reg.area[1, 6] == 0.0


def test_zone_with_mixing_model_is_skipped():
    reg = build_registry(_add_lab_zone(get_default_office_zone(), model="mixing"))
    assert len(reg.zones) == 1
    with pytest.raises(MundtConfigError, match="not configured"):
        reg.topology_for(1)


def test_zone_name_match_is_case_insensitive():
    host = get_default_office_zone()
    for node in host.air_nodes:
        node.zone_name = "OFFICE"
    reg = build_registry(host)
    assert len(reg.zones[0].nodes) == 7


def test_missing_air_nodes_are_collected_before_fatal():
    host = get_default_office_zone()
    host.zones[0].n_air_nodes = 9
    with pytest.raises(MundtFatalError, match="Preceding condition") as exc:
        build_registry(host)
    assert len(exc.value.severe) == 2
    assert all("is not found" in m for m in exc.value.severe)


def test_unknown_role_is_a_construction_error():
    host = get_default_office_zone()
    host.air_nodes[2].role = "Plume"
    with pytest.raises(MundtFatalError) as exc:
        build_registry(host)
    assert any("Non-Standard Type of Air Node" in m for m in exc.value.severe)


def test_mask_length_mismatch_is_severe():
    host = get_default_office_zone()
    host.air_nodes[1].surf_mask = (True, False)
    with pytest.raises(MundtFatalError) as exc:
        build_registry(host)
    assert any("mask length mismatch" in m for m in exc.value.severe)


def test_every_surface_needs_exactly_one_owner():
    host = get_default_office_zone()
    host.air_nodes[1].surf_mask = tuple(i in (0, 1) for i in range(10))
    host.air_nodes[4].surf_mask = tuple(i in (6, 7, 8) for i in range(10))
    with pytest.raises(MundtFatalError) as exc:
        build_registry(host)
    msgs = exc.value.severe
    assert any("Surface 2 " in m and "several air nodes" in m for m in msgs)
    assert any("Surface 10 " in m and "not assigned" in m for m in msgs)


def test_parse_role_aliases():
    assert parse_role("Inlet") is NodeRole.SUPPLY
    assert parse_role("MundtRoom") is NodeRole.ROOM
    assert parse_role("thermostat") is NodeRole.CONTROL
    assert parse_role(NodeRole.RETURN) is NodeRole.RETURN
    with pytest.raises(MundtConfigError):
        parse_role("plume")


def test_floor_maximum_reported_without_sizing_tables():
    host = _add_lab_zone(get_default_office_zone())
    floor, room = host.air_nodes[-5], host.air_nodes[-3]
    floor.surf_mask = (True, False, True, False, False, False)
    room.surf_mask = (False, False, False, True, True, True)
    reg = build_registry(host)
    assert reg.max_floor_surfaces == 2
    assert reg.zones[1].n_floor_surfaces == 2
    assert reg.area.shape == (2, reg.max_surfaces)
    assert reg.node_temps.shape == (2, reg.max_air_nodes)
