"""Assemble painted grids, materials and run settings into a solver bundle."""

from __future__ import annotations

import dataclasses
import logging

import numpy as np

from geosetup.core.types import Grid
from geosetup.modeling.material_db import MaterialDatabase
from geosetup.modeling.scaling import ScalingSystem
from geosetup.modeling.schema import ModelBundle, Phase, RunParams, SofteningLaw
from geosetup.modeling.validators import (
    validate_grid_phases,
    validate_grid_temperature,
    validate_rheology_references,
    validate_softening_references,
)


logger = logging.getLogger(__name__)

# Phase field -> unit of its dimensional value.
PHASE_UNITS: dict[str, str] = {
    "rho": "kg/m^3",
    "alpha": "1/K",
    "k": "W/m/K",
    "cp": "J/kg/K",
    "radiogenic_heat": "W/m^3",
    "shear_modulus": "Pa",
    "cohesion": "Pa",
    "eta": "Pa*s",
}

TIME_FIELDS = ("time_end", "dt", "dt_min", "dt_max", "time_start")


def nondimensionalize_phase(phase: Phase, scaling: ScalingSystem) -> Phase:
    values = {}
    for name, unit in PHASE_UNITS.items():
        value = getattr(phase, name)
        if value is not None:
            values[name] = scaling.nondimensionalize(value, unit)
    return dataclasses.replace(phase, **values)


def nondimensionalize_softening(law: SofteningLaw, scaling: ScalingSystem) -> SofteningLaw:
    if law.lm is None:
        return law
    return dataclasses.replace(law, lm=scaling.nondimensionalize(law.lm, "km"))


def nondimensionalize_run(run: RunParams, scaling: ScalingSystem) -> RunParams:
    times = {name: scaling.nondimensionalize(getattr(run.time, name), "Myr") for name in TIME_FIELDS}
    gravity = tuple(scaling.nondimensionalize(g, "m/s^2") for g in run.gravity)
    return dataclasses.replace(run, time=dataclasses.replace(run.time, **times), gravity=gravity)


def assemble(
    grid: Grid,
    scaling: ScalingSystem,
    materials: MaterialDatabase,
    run_params: RunParams | None = None,
) -> ModelBundle:
    """Validate and package a model setup for the solver.

    Every phase in ``grid.phase`` must be registered and every softening and
    creep-law reference must resolve. Material and run parameters are
    non-dimensionalized with ``scaling``; the grid is copied read-only.
    """

    run_params = run_params or RunParams()
    validate_grid_phases(grid, materials)
    validate_grid_temperature(grid)
    validate_softening_references(materials)
    validate_rheology_references(materials)

    phases = tuple(nondimensionalize_phase(p, scaling) for p in materials.phases)
    softening = tuple(nondimensionalize_softening(s, scaling) for s in materials.softening_laws)
    run = nondimensionalize_run(run_params, scaling)

    frozen = grid.frozen_copy()
    temperature = np.asarray(scaling.nondimensionalize(frozen.temperature, "C"), dtype=float)
    temperature.flags.writeable = False

    bundle = ModelBundle(
        grid=frozen,
        temperature=temperature,
        scaling=scaling,
        phases=phases,
        softening_laws=softening,
        run=run,
    )
    logger.info(
        f"Assembled model with grid {grid.shape}, {len(phases)} phases and {len(softening)} softening laws."
    )
    return bundle
