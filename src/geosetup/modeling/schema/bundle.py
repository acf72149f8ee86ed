"""Read-only model bundle handed to the solver."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from geosetup.core.types import Grid
from geosetup.modeling.scaling import ScalingSystem
from geosetup.modeling.schema.material import Phase, SofteningLaw
from geosetup.modeling.schema.run_config import RunParams


@dataclass(frozen=True)
class ModelBundle:
    """Assembled model setup.

    ``grid`` keeps dimensional coordinates [km] and temperature [degC] with
    non-writable fields; ``temperature`` is the non-dimensional temperature
    field. ``phases``, ``softening_laws`` and ``run`` hold non-dimensional
    values, ordered by ID.
    """

    grid: Grid
    temperature: np.ndarray
    scaling: ScalingSystem
    phases: tuple[Phase, ...]
    softening_laws: tuple[SofteningLaw, ...]
    run: RunParams

    @property
    def phase_ids(self) -> tuple[int, ...]:
        return tuple(p.id for p in self.phases)

    def phase(self, phase_id: int) -> Phase:
        for p in self.phases:
            if p.id == phase_id:
                return p
        raise KeyError(f"Phase {phase_id} is not part of this bundle.")
