"""Closed-form thermal profiles for plates and mantle.

Units: depth and lateral position in km, age in Myr, spreading velocity in
cm/yr, thermal diffusivity in m^2/s and temperature in degrees Celsius.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.special import erf

from geosetup.core.types import Array, Extent
from geosetup.errors import ConfigError
from geosetup.modeling.units import KM_PER_CM_YR_MYR, METERS_PER_KM, SECONDS_PER_MYR


KAPPA = 1.0e-6  # m^2/s
AGE_EPSILON = 1.0e-6  # Myr


def _check_age(age: float, name: str = "age") -> None:
    if not np.isfinite(age) or age < 0.0:
        raise ConfigError(f"{name} must be non-negative, got {age}.")


def _check_kappa(kappa: float) -> None:
    if not kappa > 0.0:
        raise ConfigError(f"kappa must be positive, got {kappa}.")


@dataclass(frozen=True)
class UniformTemp:
    value: float = 1000.0


@dataclass(frozen=True)
class LinearTemp:
    """Linear ramp from ``top`` at the region top to ``bottom`` at its base."""

    top: float = 0.0
    bottom: float = 1000.0


@dataclass(frozen=True)
class HalfspaceCoolingTemp:
    surface: float = 0.0
    mantle: float = 1350.0
    age: float = 60.0
    kappa: float = KAPPA

    def __post_init__(self) -> None:
        _check_age(self.age)
        _check_kappa(self.kappa)


@dataclass(frozen=True)
class SpreadingRateTemp:
    """Half-space cooling with age increasing away from a ridge.

    The ridge sits on the ``ridge_side`` edge of the region, measured along
    the region's local x axis.
    """

    surface: float = 0.0
    mantle: float = 1350.0
    ridge_side: str = "left"
    spreading_velocity: float = 3.0
    age_at_ridge: float = 0.0
    max_age: float = 60.0
    kappa: float = KAPPA

    def __post_init__(self) -> None:
        side = self.ridge_side.strip().lower()
        if side not in {"left", "right"}:
            raise ConfigError(f"ridge_side must be 'left' or 'right', got '{self.ridge_side}'.")
        object.__setattr__(self, "ridge_side", side)
        if not self.spreading_velocity > 0.0:
            raise ConfigError(f"spreading_velocity must be positive, got {self.spreading_velocity}.")
        _check_age(self.age_at_ridge, "age_at_ridge")
        _check_age(self.max_age, "max_age")
        if self.max_age < self.age_at_ridge:
            raise ConfigError("max_age must not be smaller than age_at_ridge.")
        _check_kappa(self.kappa)


@dataclass(frozen=True)
class AdiabaticTemp:
    """Adiabatic gradient [degC/km] added below ``surface`` after painting."""

    gradient: float = 0.4
    surface: float = 0.0


ThermalProfile = UniformTemp | LinearTemp | HalfspaceCoolingTemp | SpreadingRateTemp | AdiabaticTemp


def halfspace_cooling(
    depth: Array | float,
    surface: float,
    mantle: float,
    age: Array | float,
    kappa: float = KAPPA,
) -> Array:
    """Half-space cooling temperature at ``depth`` [km] for ``age`` [Myr]."""

    age = np.asarray(age, dtype=float)
    if np.any(age < 0.0):
        raise ConfigError("age must be non-negative.")
    age_s = np.maximum(age, AGE_EPSILON) * SECONDS_PER_MYR
    depth_m = np.abs(np.asarray(depth, dtype=float)) * METERS_PER_KM
    return surface + (mantle - surface) * erf(depth_m / (2.0 * np.sqrt(kappa * age_s)))


def spreading_age(lateral: Array | float, profile: SpreadingRateTemp, lateral_range: Extent) -> Array:
    """Plate age [Myr] at local lateral positions [km] from the ridge edge."""

    ridge = lateral_range[0] if profile.ridge_side == "left" else lateral_range[1]
    distance = np.abs(np.asarray(lateral, dtype=float) - ridge)
    age = distance / (profile.spreading_velocity * KM_PER_CM_YR_MYR)
    return np.clip(age, profile.age_at_ridge, profile.max_age)


def check_profile(profile: ThermalProfile | None, thickness: float) -> None:
    """Raise ``ConfigError`` if ``profile`` cannot be painted on a region of ``thickness`` [km]."""

    if profile is None:
        return
    if isinstance(profile, AdiabaticTemp):
        raise ConfigError("AdiabaticTemp is applied to the whole grid with apply_adiabat, not per region.")
    if type(profile) not in _EVALUATORS:
        raise ConfigError(f"Unsupported thermal profile {type(profile).__name__}.")
    if isinstance(profile, LinearTemp) and not (np.isfinite(thickness) and thickness > 0.0):
        raise ConfigError("LinearTemp needs a region with finite positive thickness.")


def _eval_uniform(profile: UniformTemp, depth: Array, lateral: Array, lateral_range: Extent, thickness: float) -> Array:
    return np.full(np.shape(depth), float(profile.value))


def _eval_linear(profile: LinearTemp, depth: Array, lateral: Array, lateral_range: Extent, thickness: float) -> Array:
    frac = np.clip(np.asarray(depth, dtype=float) / thickness, 0.0, 1.0)
    return profile.top + (profile.bottom - profile.top) * frac


def _eval_halfspace(
    profile: HalfspaceCoolingTemp, depth: Array, lateral: Array, lateral_range: Extent, thickness: float
) -> Array:
    return halfspace_cooling(depth, profile.surface, profile.mantle, profile.age, profile.kappa)


def _eval_spreading(
    profile: SpreadingRateTemp, depth: Array, lateral: Array, lateral_range: Extent, thickness: float
) -> Array:
    age = spreading_age(lateral, profile, lateral_range)
    return halfspace_cooling(depth, profile.surface, profile.mantle, age, profile.kappa)


_EVALUATORS = {
    UniformTemp: _eval_uniform,
    LinearTemp: _eval_linear,
    HalfspaceCoolingTemp: _eval_halfspace,
    SpreadingRateTemp: _eval_spreading,
}


def evaluate_profile(
    profile: ThermalProfile,
    depth: Array,
    lateral: Array,
    *,
    lateral_range: Extent,
    thickness: float,
) -> Array:
    """Temperature of a region profile at local depth and lateral position."""

    check_profile(profile, thickness)
    return _EVALUATORS[type(profile)](profile, depth, lateral, lateral_range, thickness)


def adiabat(z: Array, profile: AdiabaticTemp) -> Array:
    """Temperature increment at vertical coordinates ``z`` [km]."""

    return -(np.asarray(z, dtype=float) - profile.surface) * profile.gradient
