"""Material (phase) and softening-law records."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from geosetup.errors import ConfigError


@dataclass(frozen=True)
class SofteningLaw:
    """Linear strength reduction with accumulated plastic strain (APS).

    Strength is unchanged below ``aps1``, drops linearly to ``1 - a`` of its
    initial value at ``aps2`` and stays there. ``lm`` is an optional material
    length [km] for non-local softening.
    """

    id: int
    aps1: float
    aps2: float
    a: float
    lm: float | None = None

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ConfigError(f"SofteningLaw id must be non-negative, got {self.id}.")
        if self.aps1 < 0.0 or not self.aps2 > self.aps1:
            raise ConfigError(f"SofteningLaw {self.id}: need 0 <= aps1 < aps2, got ({self.aps1}, {self.aps2}).")
        if not 0.0 < self.a <= 1.0:
            raise ConfigError(f"SofteningLaw {self.id}: reduction ratio a must lie in (0, 1], got {self.a}.")
        if self.lm is not None and self.lm <= 0.0:
            raise ConfigError(f"SofteningLaw {self.id}: lm must be positive when provided.")

    def strength_factor(self, aps: np.ndarray | float) -> np.ndarray | float:
        aps = np.asarray(aps, dtype=float)
        frac = np.clip((aps - self.aps1) / (self.aps2 - self.aps1), 0.0, 1.0)
        out = 1.0 - self.a * frac
        if out.ndim == 0:
            return float(out)
        return out


@dataclass(frozen=True)
class Phase:
    """Material properties of one phase, in SI units unless noted.

    Parameters
    - ``rho``: density [kg/m^3]; ``alpha``: thermal expansivity [1/K].
    - ``k``: conductivity [W/m/K]; ``cp``: heat capacity [J/kg/K].
    - ``radiogenic_heat``: heat production [W/m^3].
    - ``shear_modulus`` [Pa], ``cohesion`` [Pa], ``friction`` [deg].
    - ``dislocation_law`` / ``diffusion_law``: names from the creep-law catalog.
    - ``ch_soft_id`` / ``fr_soft_id``: softening laws for cohesion and friction.
    - ``eta``: optional constant viscosity [Pa s].
    """

    id: int
    name: str = ""
    rho: float = 3300.0
    alpha: float = 3.0e-5
    k: float = 3.0
    cp: float = 1050.0
    radiogenic_heat: float = 0.0
    shear_modulus: float | None = None
    cohesion: float | None = None
    friction: float | None = None
    dislocation_law: str | None = None
    diffusion_law: str | None = None
    ch_soft_id: int | None = None
    fr_soft_id: int | None = None
    eta: float | None = None

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ConfigError(f"Phase id must be non-negative, got {self.id}.")
        for field in ("rho", "k", "cp"):
            if not getattr(self, field) > 0.0:
                raise ConfigError(f"Phase {self.id}: {field} must be positive.")
        if self.radiogenic_heat < 0.0:
            raise ConfigError(f"Phase {self.id}: radiogenic_heat must be non-negative.")
        for field in ("shear_modulus", "eta"):
            value = getattr(self, field)
            if value is not None and not value > 0.0:
                raise ConfigError(f"Phase {self.id}: {field} must be positive when provided.")
        if self.cohesion is not None and self.cohesion < 0.0:
            raise ConfigError(f"Phase {self.id}: cohesion must be non-negative.")
        if self.friction is not None and not 0.0 <= self.friction < 90.0:
            raise ConfigError(f"Phase {self.id}: friction angle must lie in [0, 90) degrees.")
