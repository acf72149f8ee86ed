"""Non-dimensionalization from four reference quantities."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from geosetup.errors import ConfigError
from geosetup.modeling.units import QUANTITY_DIMENSIONS, resolve_unit, to_si


Quantity = tuple[float, str]


def _as_output(values: np.ndarray) -> np.ndarray | float:
    if values.ndim == 0:
        return float(values)
    return values


@dataclass(frozen=True)
class ScalingSystem:
    """Characteristic scales derived from reference quantities.

    Parameters (SI)
    - ``length``: reference length [m].
    - ``stress``: reference stress [Pa].
    - ``temperature``: reference temperature [K].
    - ``viscosity``: reference viscosity [Pa s]; the time scale is then
      ``viscosity / stress``.
    - ``time``: reference time [s]; give it instead of ``viscosity``.

    The mass scale closes the system as ``stress * length * time**2``, so
    every derived scale is a product of powers of the four base scales.
    """

    length: float
    stress: float
    temperature: float
    viscosity: float | None = None
    time: float | None = None

    def __post_init__(self) -> None:
        if (self.viscosity is None) == (self.time is None):
            raise ConfigError("Give exactly one of viscosity or time as reference quantity.")
        for name in ("length", "stress", "temperature", "viscosity", "time"):
            value = getattr(self, name)
            if value is None:
                continue
            if not np.isfinite(value) or value <= 0.0:
                raise ConfigError(f"Reference {name} must be positive and finite, got {value}.")

    @classmethod
    def from_units(
        cls,
        length: Quantity,
        stress: Quantity,
        temperature: Quantity,
        viscosity: Quantity | None = None,
        time: Quantity | None = None,
    ) -> "ScalingSystem":
        """Build from ``(value, unit)`` pairs, e.g. ``length=(100.0, "km")``."""

        def _si(quantity: Quantity | None, expected: str) -> float | None:
            if quantity is None:
                return None
            value, unit = quantity
            dimension, _, _ = resolve_unit(unit)
            if dimension != expected:
                raise ConfigError(f"Unit '{unit}' is not a {expected} unit.")
            return float(to_si(value, unit))

        return cls(
            length=_si(length, "length"),
            stress=_si(stress, "stress"),
            temperature=_si(temperature, "temperature"),
            viscosity=_si(viscosity, "viscosity"),
            time=_si(time, "time"),
        )

    @property
    def time_scale(self) -> float:
        if self.time is not None:
            return float(self.time)
        return float(self.viscosity) / float(self.stress)

    @property
    def mass_scale(self) -> float:
        return float(self.stress) * float(self.length) * self.time_scale**2

    def scale(self, quantity: str) -> float:
        """Return the SI value of one non-dimensional unit of ``quantity``."""

        try:
            a, b, c, d = QUANTITY_DIMENSIONS[quantity]
        except KeyError as exc:
            available = ", ".join(sorted(QUANTITY_DIMENSIONS))
            raise ConfigError(f"Unknown quantity '{quantity}'. Available quantities: {available}") from exc
        return float(self.length) ** a * self.time_scale**b * self.mass_scale**c * float(self.temperature) ** d

    @property
    def factors(self) -> dict[str, float]:
        return {name: self.scale(name) for name in QUANTITY_DIMENSIONS}

    def nondimensionalize(self, value: np.ndarray | float, unit: str) -> np.ndarray | float:
        quantity, factor, offset = resolve_unit(unit)
        si = np.asarray(value, dtype=float) * factor + offset
        return _as_output(si / self.scale(quantity))

    def dimensionalize(self, value: np.ndarray | float, unit: str) -> np.ndarray | float:
        quantity, factor, offset = resolve_unit(unit)
        si = np.asarray(value, dtype=float) * self.scale(quantity)
        return _as_output((si - offset) / factor)
