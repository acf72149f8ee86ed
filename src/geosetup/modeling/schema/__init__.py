from .bundle import ModelBundle
from .material import Phase, SofteningLaw
from .run_config import RunParams, SolverFlags, SolverOptions, TimeStepping

__all__ = ["Phase", "SofteningLaw", "TimeStepping", "SolverOptions", "SolverFlags", "RunParams", "ModelBundle"]
