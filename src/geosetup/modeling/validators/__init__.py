from .material_validator import validate_rheology_references, validate_softening_references
from .model_validator import validate_grid_phases, validate_grid_temperature

__all__ = [
    "validate_softening_references",
    "validate_rheology_references",
    "validate_grid_phases",
    "validate_grid_temperature",
]
