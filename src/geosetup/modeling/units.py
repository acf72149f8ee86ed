"""Physical constants and the named unit table used for scaling."""

from __future__ import annotations

import numpy as np

from geosetup.errors import ConfigError


SECONDS_PER_YEAR = 365.25 * 24.0 * 3600.0
SECONDS_PER_MYR = 1.0e6 * SECONDS_PER_YEAR
METERS_PER_KM = 1.0e3
KELVIN_OFFSET = 273.15
# Distance [km] travelled in 1 Myr at 1 cm/yr.
KM_PER_CM_YR_MYR = 1.0e-2 * 1.0e6 / METERS_PER_KM

# Exponents over (length, time, mass, temperature).
Dimension = tuple[int, int, int, int]

QUANTITY_DIMENSIONS: dict[str, Dimension] = {
    "dimensionless": (0, 0, 0, 0),
    "length": (1, 0, 0, 0),
    "time": (0, 1, 0, 0),
    "mass": (0, 0, 1, 0),
    "temperature": (0, 0, 0, 1),
    "velocity": (1, -1, 0, 0),
    "acceleration": (1, -2, 0, 0),
    "strain_rate": (0, -1, 0, 0),
    "stress": (-1, -2, 1, 0),
    "viscosity": (-1, -1, 1, 0),
    "density": (-3, 0, 1, 0),
    "thermal_expansivity": (0, 0, 0, -1),
    "conductivity": (1, -3, 1, -1),
    "heat_capacity": (2, -2, 0, -1),
    "heat_production": (-1, -3, 1, 0),
    "diffusivity": (2, -1, 0, 0),
    "energy": (2, -2, 1, 0),
    "activation_volume": (3, 0, 0, 0),
}

# unit -> (quantity, factor to SI, additive offset in SI)
UNITS: dict[str, tuple[str, float, float]] = {
    "m": ("length", 1.0, 0.0),
    "km": ("length", METERS_PER_KM, 0.0),
    "s": ("time", 1.0, 0.0),
    "yr": ("time", SECONDS_PER_YEAR, 0.0),
    "kyr": ("time", 1.0e3 * SECONDS_PER_YEAR, 0.0),
    "Myr": ("time", SECONDS_PER_MYR, 0.0),
    "kg": ("mass", 1.0, 0.0),
    "K": ("temperature", 1.0, 0.0),
    "C": ("temperature", 1.0, KELVIN_OFFSET),
    "m/s": ("velocity", 1.0, 0.0),
    "cm/yr": ("velocity", 1.0e-2 / SECONDS_PER_YEAR, 0.0),
    "mm/yr": ("velocity", 1.0e-3 / SECONDS_PER_YEAR, 0.0),
    "m/s^2": ("acceleration", 1.0, 0.0),
    "1/s": ("strain_rate", 1.0, 0.0),
    "Pa": ("stress", 1.0, 0.0),
    "MPa": ("stress", 1.0e6, 0.0),
    "GPa": ("stress", 1.0e9, 0.0),
    "Pa*s": ("viscosity", 1.0, 0.0),
    "kg/m^3": ("density", 1.0, 0.0),
    "1/K": ("thermal_expansivity", 1.0, 0.0),
    "W/m/K": ("conductivity", 1.0, 0.0),
    "J/kg/K": ("heat_capacity", 1.0, 0.0),
    "W/m^3": ("heat_production", 1.0, 0.0),
    "uW/m^3": ("heat_production", 1.0e-6, 0.0),
    "m^2/s": ("diffusivity", 1.0, 0.0),
    "J/mol": ("energy", 1.0, 0.0),
    "kJ/mol": ("energy", 1.0e3, 0.0),
    "m^3/mol": ("activation_volume", 1.0, 0.0),
    "cm^3/mol": ("activation_volume", 1.0e-6, 0.0),
}


def resolve_unit(unit: str) -> tuple[str, float, float]:
    """Return ``(quantity, factor, offset)`` for a unit or quantity name.

    Quantity names (``"velocity"``) are taken to be SI values.
    """

    key = unit.strip()
    if key in UNITS:
        return UNITS[key]
    if key in QUANTITY_DIMENSIONS:
        return key, 1.0, 0.0
    available = ", ".join(sorted(UNITS))
    raise ConfigError(f"Unknown unit '{unit}'. Available units: {available}")


def to_si(value: np.ndarray | float, unit: str) -> np.ndarray | float:
    """Convert a value in ``unit`` to SI."""

    _, factor, offset = resolve_unit(unit)
    return np.asarray(value, dtype=float) * factor + offset


def from_si(value: np.ndarray | float, unit: str) -> np.ndarray | float:
    """Convert an SI value to ``unit``."""

    _, factor, offset = resolve_unit(unit)
    return (np.asarray(value, dtype=float) - offset) / factor
