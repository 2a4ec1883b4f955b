import pytest

from mundt.bridge import is_active, pull_from_host, push_well_mixed
from mundt.errors import MundtFatalError
from mundt.host import SystemNode
from mundt.presets import get_default_office_zone
from mundt.psychrometrics import cp_air, hum_rat_from_dewpoint, rho_air
from mundt.topology import build_registry


def test_pull_office_scalars():
    host = get_default_office_zone()
    sc = pull_from_host(host, 0)
    rho = rho_air(101325.0, 24.0, hum_rat_from_dewpoint(24.0, 101325.0))
    assert abs(sc.air_density - rho) < 1e-6
    assert abs(sc.supply_volume_rate - (0.3 / rho)) < 1e-6
    assert abs(sc.supply_temp - 14.0) < 1e-6
    assert abs(sc.cooling_load - (0.3 * cp_air(0.008, 24.0) * 10.0)) < 1e-6
    assert abs(sc.conv_int_gain - 1500.0) < 1e-6
    assert abs(sc.vent_gain - (-30.0)) < 1e-6
    assert sc.zone_height == 3.0
    assert sc.floor_area == 30.0
    assert is_active(sc)


def test_supply_temperature_is_mass_flow_weighted():
    host = get_default_office_zone()
    zone = host.zones[0]
    zone.inlet_nodes = [SystemNode(12.0, 0.1), SystemNode(18.0, 0.3)]
    zone.zone_node.mass_flow = 0.4
    assert abs(pull_from_host(host, 0).supply_temp - 16.5) < 1e-6


def test_zero_inlet_flow_falls_back_to_first_inlet():
    host = get_default_office_zone()
    zone = host.zones[0]
    zone.inlet_nodes = [SystemNode(13.0, 0.0), SystemNode(18.0, 0.0)]
    sc = pull_from_host(host, 0)
    assert sc.supply_temp == 13.0
    assert abs(sc.cooling_load - (0.3 * cp_air(0.008, 24.0) * 24.0)) < 1e-6


def test_system_off_has_no_cooling_load():
    host = get_default_office_zone()
    host.zones[0].zone_node.mass_flow = 0.0
    sc = pull_from_host(host, 0)
    assert sc.cooling_load == 0.0
    assert sc.supply_temp == 14.0
    assert not is_active(sc)


def test_uncontrolled_zone_is_fatal():
    host = get_default_office_zone()
    host.zones[0].is_controlled = False
    with pytest.raises(MundtFatalError, match="must be controlled"):
        pull_from_host(host, 0)


def test_convective_gain_components():
    host = get_default_office_zone()
    zone = host.zones[0]
    zone.multiplier = 2.0
    zone.non_air_system_response = 100.0
    zone.sum_conv_pool = 10.0
    zone.return_air_conv_gain = 200.0
    assert abs(pull_from_host(host, 0).conv_int_gain - 1560.0) < 1e-6
    zone.no_heat_to_return_air = True
    assert abs(pull_from_host(host, 0).conv_int_gain - 1760.0) < 1e-6


def test_surface_state_refreshed_into_registry():
    host = get_default_office_zone()
    reg = build_registry(host)
    host.surfaces[3].temp_in = 27.5
    host.surfaces[3].h_conv_in = 3.25
    pull_from_host(host, 0, reg)
    assert reg.temp[0, 3] == 27.5
    assert reg.hc[0, 3] == 3.25
    assert reg.temp[0, 0] == 22.0


def test_push_well_mixed():
    host = get_default_office_zone()
    host.air_models[0].sim_air_model = True
    host.zones[0].avg_air_temp = 19.5
    host.zones[0].zone_node.temp = 18.0
    push_well_mixed(host, 0)
    assert all(s.t_eff_bulk_air == 24.0 for s in host.surfaces)
    assert all(s.t_air_ref == "zone_mean_air" for s in host.surfaces)
    assert host.zones[0].avg_air_temp is None
    assert host.zones[0].zone_node.temp == 24.0
    assert host.zones[0].t_tstat_air == 24.0
    assert host.air_models[0].sim_air_model is False
