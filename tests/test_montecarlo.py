from mundt.montecarlo import run_mc, write_mc_outputs
from mundt.presets import get_default_office_zone


def test_mc_deterministic():
    host = get_default_office_zone()
    r1 = run_mc(host, 0, (0.0, 0.4), (0.0, 0.2), (-1.0, 1.0), 5, seed=42)
    r2 = run_mc(host, 0, (0.0, 0.4), (0.0, 0.2), (-1.0, 1.0), 5, seed=42)
    assert r1["samples"] == r2["samples"]


def test_mc_leaves_base_host_untouched():
    host = get_default_office_zone()
    run_mc(host, 0, (0.0, 0.4), (0.0, 0.2), (-1.0, 1.0), 3, seed=1)
    assert host.zones[0].inlet_nodes[0].temp == 14.0
    assert host.air_models[0].convective_floor_split == 0.2
    assert host.air_models[0].sim_air_model is False


def test_mc_zero_range():
    host = get_default_office_zone()
    r = run_mc(host, 0, (0.2, 0.2), (0.1, 0.1), (0.0, 0.0), 5, seed=1)
    for metric in r["summary"].values():
        assert abs(metric["std"]) < 1e-12


def test_mc_has_spread(tmp_path):
    host = get_default_office_zone()
    r = run_mc(host, 0, (0.0, 0.4), (0.0, 0.2), (-1.0, 1.0), 5, seed=1)
    assert r["summary"]["T_floor_C"]["std"] > 0
    write_mc_outputs(r, tmp_path / "mc")
    assert (tmp_path / "mc" / "mc_results.csv").exists()
    assert (tmp_path / "mc" / "mc_summary.json").exists()
