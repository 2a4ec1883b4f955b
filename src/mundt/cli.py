from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from .compare import compare_runs, load_run
from .constants import COUPLING_DIRECT, COUPLING_INDIRECT
from .gates import gate_reference
from .io import load_case_json, make_results_dir, save_case_json
from .montecarlo import run_mc, write_mc_outputs
from .plotting import plot_profile
from .presets import get_default_office_zone
from .run import MundtModel, export_case_artifacts


def _parse_range(text: str) -> tuple[float, float]:
    lo, hi = (float(x) for x in text.split(","))
    if hi < lo:
        raise argparse.ArgumentTypeError(f"range upper bound below lower bound: {text}")
    return lo, hi


def _load_host(args):
    host = load_case_json(Path(args.case)) if args.case else get_default_office_zone()
    if getattr(args, "coupling", None):
        for am in host.air_models:
            am.coupling = args.coupling
        host.validate()
    return host


def _run(args) -> None:
    host = _load_host(args)
    model = MundtModel(host)
    results = model.run_all()
    out = make_results_dir(args.name, root=args.results_dir)
    metas = export_case_artifacts(
        out,
        args.name,
        model,
        results,
        run_params={
            "command": "run",
            "case": args.case or "preset:office",
            "coupling": args.coupling or "from_case",
        },
    )
    if args.do_plots:
        for zone_name, meta in metas.items():
            plot_profile(out, f"{args.name}_{zone_name}", meta)
    for r in results:
        if r.strat is None:
            print(f"{r.zone_name}: well mixed (supply or cooling load below threshold)")
        else:
            s = r.strat
            print(
                f"{r.zone_name}: T_floor={s.t_floor:.2f} C  T_control={s.t_control:.2f} C  "
                f"T_leaving={s.t_leaving:.2f} C  slope={s.slope:.3f} K/m ({s.slope_clamp})"
            )
    print(f"Results written to {out}")


def _mc(args) -> None:
    host = _load_host(args)
    zone_index = args.zone
    if zone_index is None:
        zone_index = MundtModel(host).registry.zones[0].host_index
    result = run_mc(
        host,
        zone_index,
        args.conv_range,
        args.infil_range,
        args.supply_dt,
        args.n,
        seed=args.seed,
    )
    out = make_results_dir("mc", root=args.results_dir)
    write_mc_outputs(result, out)
    print(json.dumps(result["summary"], indent=2))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mundt")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("gate")

    for name in ["run", "mc"]:
        s = sub.add_parser(name)
        s.add_argument("--case", default="", help="host case JSON; default office preset")
        s.add_argument("--coupling", choices=[COUPLING_DIRECT, COUPLING_INDIRECT])
        s.add_argument("--results-dir", default="results")

    sub.choices["run"].add_argument("--name", default="mundt")
    sub.choices["run"].add_argument("--do-plots", action="store_true")

    mc = sub.choices["mc"]
    mc.add_argument("--zone", type=int, default=None)
    mc.add_argument("--n", type=int, default=100)
    mc.add_argument("--seed", type=int, default=None)
    mc.add_argument("--conv-range", type=_parse_range, default=(0.0, 0.4))
    mc.add_argument("--infil-range", type=_parse_range, default=(0.0, 0.2))
    mc.add_argument("--supply-dt", type=_parse_range, default=(-1.0, 1.0))

    c = sub.add_parser("compare")
    c.add_argument("run_a")
    c.add_argument("run_b")

    pr = sub.add_parser("preset")
    pr.add_argument("--out", default="office_case.json")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.cmd == "gate":
        print(asdict(gate_reference()))
        return
    if args.cmd == "run":
        _run(args)
        return
    if args.cmd == "mc":
        _mc(args)
        return
    if args.cmd == "compare":
        comp = compare_runs(load_run(Path(args.run_a)), load_run(Path(args.run_b)))
        print(json.dumps(comp, indent=2, default=str))
        return
    save_case_json(get_default_office_zone(), args.out)
    print(f"Preset case written to {args.out}")


if __name__ == "__main__":
    main()
