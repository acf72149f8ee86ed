"""Run and solver configuration passed through to the solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from geosetup.errors import ConfigError


SolverFlags = tuple[tuple[str, str | None], ...]


@dataclass(frozen=True)
class TimeStepping:
    """Time-stepping knobs; times in Myr."""

    time_end: float = 1.0
    dt: float = 0.05
    dt_min: float = 1.0e-3
    dt_max: float = 0.1
    nstep_max: int = 100
    nstep_out: int = 10
    time_start: float = 0.0

    def __post_init__(self) -> None:
        if self.time_end <= self.time_start:
            raise ConfigError("time_end must be larger than time_start.")
        if not 0.0 < self.dt_min <= self.dt <= self.dt_max:
            raise ConfigError("Time steps must satisfy 0 < dt_min <= dt <= dt_max.")
        if self.nstep_max < 1:
            raise ConfigError("nstep_max must be >= 1.")
        if self.nstep_out < 1:
            raise ConfigError("nstep_out must be >= 1.")


@dataclass(frozen=True)
class SolverOptions:
    """Solver selection and opaque key/value flags for the solver backend."""

    solver_type: str = "direct"
    direct_solver: str = "mumps"
    mg_levels: int = 3
    mg_coarse_solver: str = "direct"
    flags: SolverFlags = ()

    def __post_init__(self) -> None:
        kind = self.solver_type.strip().lower()
        if kind not in {"direct", "multigrid"}:
            raise ConfigError(f"solver_type must be 'direct' or 'multigrid', got '{self.solver_type}'.")
        object.__setattr__(self, "solver_type", kind)
        if kind == "multigrid" and self.mg_levels < 2:
            raise ConfigError("Multigrid needs at least two levels.")
        flags = tuple((str(key), None if value is None else str(value)) for key, value in self.flags)
        if any(not key for key, _ in flags):
            raise ConfigError("Solver flag names must be non-empty.")
        object.__setattr__(self, "flags", flags)

    @classmethod
    def with_flags(cls, flags: Mapping[str, object], **kwargs) -> "SolverOptions":
        return cls(flags=tuple(flags.items()), **kwargs)


@dataclass(frozen=True)
class RunParams:
    time: TimeStepping = field(default_factory=TimeStepping)
    solver: SolverOptions = field(default_factory=SolverOptions)
    gravity: tuple[float, float, float] = (0.0, 0.0, -9.81)  # m/s^2

    def __post_init__(self) -> None:
        if len(self.gravity) != 3:
            raise ConfigError("gravity must be a 3D vector.")
