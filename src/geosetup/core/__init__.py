from .grid import allocate_grid, node_coordinates, position_of
from .painter import apply_adiabat, apply_all, apply_region
from .thermal import (
    AGE_EPSILON,
    KAPPA,
    AdiabaticTemp,
    HalfspaceCoolingTemp,
    LinearTemp,
    SpreadingRateTemp,
    ThermalProfile,
    UniformTemp,
    check_profile,
    evaluate_profile,
    halfspace_cooling,
    spreading_age,
)
from .types import Box, Ellipsoid, Grid, PhaseLayer, Region, constant_layers, layers_from_interfaces, rotation_matrix

__all__ = [
    "Grid",
    "PhaseLayer",
    "Box",
    "Ellipsoid",
    "Region",
    "constant_layers",
    "layers_from_interfaces",
    "rotation_matrix",
    "allocate_grid",
    "position_of",
    "node_coordinates",
    "UniformTemp",
    "LinearTemp",
    "HalfspaceCoolingTemp",
    "SpreadingRateTemp",
    "AdiabaticTemp",
    "ThermalProfile",
    "KAPPA",
    "AGE_EPSILON",
    "check_profile",
    "evaluate_profile",
    "halfspace_cooling",
    "spreading_age",
    "apply_region",
    "apply_all",
    "apply_adiabat",
]
