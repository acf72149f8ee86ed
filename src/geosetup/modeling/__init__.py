from .builders import assemble, nondimensionalize_phase, nondimensionalize_run, nondimensionalize_softening
from .material_db import MaterialDatabase
from .rheology import CREEP_LAWS, CreepLaw, get_creep_law, list_creep_laws
from .scaling import ScalingSystem
from .schema import ModelBundle, Phase, RunParams, SofteningLaw, SolverOptions, TimeStepping
from .units import KELVIN_OFFSET, SECONDS_PER_MYR, SECONDS_PER_YEAR, from_si, to_si
from .validators import (
    validate_grid_phases,
    validate_grid_temperature,
    validate_rheology_references,
    validate_softening_references,
)

__all__ = [
    "Phase",
    "SofteningLaw",
    "TimeStepping",
    "SolverOptions",
    "RunParams",
    "ModelBundle",
    "ScalingSystem",
    "MaterialDatabase",
    "CreepLaw",
    "CREEP_LAWS",
    "get_creep_law",
    "list_creep_laws",
    "assemble",
    "nondimensionalize_phase",
    "nondimensionalize_softening",
    "nondimensionalize_run",
    "validate_softening_references",
    "validate_rheology_references",
    "validate_grid_phases",
    "validate_grid_temperature",
    "SECONDS_PER_YEAR",
    "SECONDS_PER_MYR",
    "KELVIN_OFFSET",
    "to_si",
    "from_si",
]
