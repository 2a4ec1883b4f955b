from __future__ import annotations

import logging
from pathlib import Path

from .bridge import is_active, pull_from_host, push_to_host, push_well_mixed
from .cases import FloorSurfaceSet, SolveContext, ZoneStepResult
from .classify import classify_nodes
from .constants import CP_AIR, MAX_SLOPE, MIN_SLOPE
from .diagnostics import summarize_result
from .host import HostModel
from .io import (
    dump_meta_json,
    print_validity_summary,
    write_nodes_csv,
    write_run_json,
    write_summary_csv,
    write_validity_json,
)
from .solver import solve_stratification
from .topology import TopologyRegistry, build_registry

log = logging.getLogger(__name__)


class MundtModel:
    """Mundt room-air model bound to one host model.

    The topology registry is built on the first call so that every zone using
    the model is discovered before any zone is solved.
    """

    def __init__(self, host: HostModel):
        self.host = host
        self._registry: TopologyRegistry | None = None

    @property
    def registry(self) -> TopologyRegistry:
        if self._registry is None:
            self._registry = build_registry(self.host)
        return self._registry

    def run(self, zone_index: int) -> ZoneStepResult:
        reg = self.registry
        topo = reg.topology_for(zone_index)
        am = self.host.air_models[zone_index]
        scalars = pull_from_host(self.host, zone_index, reg)

        if not is_active(scalars):
            log.debug(
                "Zone=%s: supply %.4g m3/s, load %.4g W; using well-mixed air",
                topo.name,
                scalars.supply_volume_rate,
                scalars.cooling_load,
            )
            push_well_mixed(self.host, zone_index)
            return ZoneStepResult(
                zone_name=topo.name,
                host_index=zone_index,
                mundt_index=topo.mundt_index,
                active=False,
                scalars=scalars,
                strat=None,
                coupling=am.coupling,
            )

        mi = topo.mundt_index
        n = topo.n_surfaces
        roles = classify_nodes(topo)
        ctx = SolveContext(
            topology=topo,
            roles=roles,
            scalars=scalars,
            floor=FloorSurfaceSet.gather(
                reg.area[mi, :n], reg.hc[mi, :n], reg.temp[mi, :n], roles.floor_surfaces
            ),
            convective_floor_split=am.convective_floor_split,
            infiltration_floor_split=am.infiltration_floor_split,
            n_surfaces=n,
        )
        strat = solve_stratification(ctx)

        reg.node_temps[mi, : len(topo.nodes)] = strat.node_temps
        t_mean_air = reg.t_mean_air[mi, :n]
        t_mean_air[strat.surface_assigned] = strat.surface_t_mean_air[strat.surface_assigned]

        push_to_host(self.host, zone_index, reg, topo, strat)
        return ZoneStepResult(
            zone_name=topo.name,
            host_index=zone_index,
            mundt_index=mi,
            active=True,
            scalars=scalars,
            strat=strat,
            coupling=am.coupling,
        )

    def run_all(self) -> list[ZoneStepResult]:
        return [self.run(z.host_index) for z in self.registry.zones]


def run_stratification_model(model: MundtModel, zone_index: int) -> ZoneStepResult:
    return model.run(zone_index)


def export_case_artifacts(
    outdir: Path,
    stem: str,
    model: MundtModel,
    results: list[ZoneStepResult],
    run_params: dict,
) -> dict:
    metas = {r.zone_name: summarize_result(model.host, model.registry, r) for r in results}
    dump_meta_json(outdir, f"{stem}_meta.json", {"zones": metas})
    flags = {name: meta["validity_flags"] for name, meta in metas.items()}
    write_validity_json(outdir, stem, flags)
    for name, zone_flags in flags.items():
        print(f"Zone {name}:")
        print_validity_summary(zone_flags)
    write_summary_csv(outdir, results)
    write_nodes_csv(outdir, metas)
    write_run_json(
        outdir,
        params=run_params,
        model_settings={"cp_air": CP_AIR, "min_slope": MIN_SLOPE, "max_slope": MAX_SLOPE},
    )
    return metas
