from pathlib import Path

import pytest

from mundt.cli import main


def test_cli_gate(capsys):
    main(["gate"])
    out = capsys.readouterr().out
    assert "errSlope" in out


def test_cli_run_preset(tmp_path: Path, capsys):
    main(["run", "--results-dir", str(tmp_path), "--name", "office"])
    out = capsys.readouterr().out
    assert "Office: T_floor=" in out
    runs = list(tmp_path.iterdir())
    assert len(runs) == 1
    assert (runs[0] / "summary.csv").exists()
    assert (runs[0] / "office_meta.json").exists()


def test_cli_preset_then_run_indirect(tmp_path: Path, capsys):
    case = tmp_path / "case.json"
    main(["preset", "--out", str(case)])
    assert case.exists()
    main(
        [
            "run",
            "--case",
            str(case),
            "--coupling",
            "indirect",
            "--results-dir",
            str(tmp_path / "results"),
        ]
    )
    assert "slope=" in capsys.readouterr().out


def test_cli_run_with_plots(tmp_path: Path):
    pytest.importorskip("matplotlib")
    main(["run", "--results-dir", str(tmp_path), "--name", "office", "--do-plots"])
    (run_dir,) = tmp_path.iterdir()
    assert (run_dir / "office_Office_profile.png").exists()


def test_cli_mc(tmp_path: Path, capsys):
    main(["mc", "--results-dir", str(tmp_path), "--n", "3", "--seed", "7"])
    assert "slope_K_m" in capsys.readouterr().out
    (run_dir,) = tmp_path.iterdir()
    assert (run_dir / "mc_summary.json").exists()
