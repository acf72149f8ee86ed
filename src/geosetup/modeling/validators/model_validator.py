"""Consistency checks between painted fields and the material database."""

from __future__ import annotations

import numpy as np

from geosetup.core.types import Grid
from geosetup.errors import ConfigError
from geosetup.modeling.material_db import MaterialDatabase


def validate_grid_phases(grid: Grid, materials: MaterialDatabase) -> None:
    used = np.unique(grid.phase)
    missing = [int(p) for p in used if int(p) not in materials]
    if missing:
        raise ConfigError(f"Phase ids {missing} appear in the grid but are not in the material database.")


def validate_grid_temperature(grid: Grid) -> None:
    if not np.all(np.isfinite(grid.temperature)):
        raise ConfigError("Temperature field contains non-finite values.")
