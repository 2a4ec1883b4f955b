import pytest

from mundt.psychrometrics import cp_air, hum_rat_from_dewpoint, rho_air, saturation_pressure


def test_rho_dry_air_at_20C():
    assert abs(rho_air(101325.0, 20.0, 0.0) - 1.204) < 2e-3


def test_rho_decreases_with_humidity():
    assert rho_air(101325.0, 20.0, 0.015) < rho_air(101325.0, 20.0, 0.0)


def test_cp_dry_and_moist():
    assert abs(cp_air(0.0, 20.0) - 1004.84) < 1e-9
    assert abs(cp_air(0.01, 20.0) - 1023.4295) < 1e-6


def test_saturation_pressure_at_triple_point_region():
    assert abs(saturation_pressure(0.0) - 610.94) < 1e-9
    assert abs(saturation_pressure(20.0) - 2339.0) < 15.0


def test_hum_rat_at_20C_dewpoint():
    assert abs(hum_rat_from_dewpoint(20.0, 101325.0) - 0.0147) < 3e-4


def test_hum_rat_rejects_boiling_conditions():
    with pytest.raises(ValueError, match="exceeds barometric"):
        hum_rat_from_dewpoint(120.0, 101325.0)
