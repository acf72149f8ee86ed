from .core import (
    AdiabaticTemp,
    Box,
    Ellipsoid,
    Grid,
    HalfspaceCoolingTemp,
    LinearTemp,
    PhaseLayer,
    SpreadingRateTemp,
    UniformTemp,
    allocate_grid,
    apply_adiabat,
    apply_all,
    apply_region,
    constant_layers,
    layers_from_interfaces,
)
from .errors import ConfigError, GeometryWarning
from .modeling import (
    MaterialDatabase,
    ModelBundle,
    Phase,
    RunParams,
    ScalingSystem,
    SofteningLaw,
    SolverOptions,
    TimeStepping,
    assemble,
)

__all__ = [
    "ConfigError",
    "GeometryWarning",
    "Grid",
    "PhaseLayer",
    "Box",
    "Ellipsoid",
    "constant_layers",
    "layers_from_interfaces",
    "allocate_grid",
    "apply_region",
    "apply_all",
    "apply_adiabat",
    "UniformTemp",
    "LinearTemp",
    "HalfspaceCoolingTemp",
    "SpreadingRateTemp",
    "AdiabaticTemp",
    "ScalingSystem",
    "Phase",
    "SofteningLaw",
    "MaterialDatabase",
    "TimeStepping",
    "SolverOptions",
    "RunParams",
    "ModelBundle",
    "assemble",
]
