from .model_builder import (
    assemble,
    nondimensionalize_phase,
    nondimensionalize_run,
    nondimensionalize_softening,
)

__all__ = [
    "assemble",
    "nondimensionalize_phase",
    "nondimensionalize_softening",
    "nondimensionalize_run",
]
