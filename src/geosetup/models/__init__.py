from .subduction import (
    LITHOSPHERIC_MANTLE,
    LOWER_CRUST,
    MANTLE,
    OCEANIC_CRUST,
    UPPER_CRUST,
    SubductionParams,
    subduction_materials,
    subduction_regions,
    subduction_setup,
)

__all__ = [
    "SubductionParams",
    "subduction_materials",
    "subduction_regions",
    "subduction_setup",
    "MANTLE",
    "OCEANIC_CRUST",
    "LITHOSPHERIC_MANTLE",
    "UPPER_CRUST",
    "LOWER_CRUST",
]
