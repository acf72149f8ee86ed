"""Structured grid allocation."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from geosetup.core.types import Array, Extent, Grid, Point3D
from geosetup.errors import ConfigError


logger = logging.getLogger(__name__)


def _as_triplet(values: int | Sequence[int], name: str) -> tuple[int, int, int]:
    if np.isscalar(values):
        values = (values, values, values)
    if len(values) != 3:
        raise ConfigError(f"{name} must have one entry per axis (x, y, z).")
    out = tuple(int(v) for v in values)
    if any(v < 1 for v in out):
        raise ConfigError(f"{name} must be >= 1 along every axis, got {tuple(values)}.")
    return out


def _marker_axis(extent: Extent, n_cells: int, markers: int) -> Array:
    n = n_cells * markers
    spacing = (extent[1] - extent[0]) / n
    return extent[0] + spacing * (np.arange(n, dtype=float) + 0.5)


def allocate_grid(
    extents: Sequence[Extent],
    element_counts: int | Sequence[int],
    markers_per_cell: int | Sequence[int] = 1,
    background_phase: int = 0,
    background_temperature: float = 0.0,
) -> Grid:
    """Allocate a grid with background-initialized phase and temperature.

    ``extents`` holds ``(min, max)`` in km for x, y and z. Fields are sampled
    at the centers of ``element_counts * markers_per_cell`` equal sub-cells
    per axis. A 2D model uses one element along y.
    """

    if len(extents) != 3:
        raise ConfigError("extents must have one (min, max) pair per axis (x, y, z).")
    ext = []
    for name, lim in zip("xyz", extents):
        lo, hi = float(lim[0]), float(lim[1])
        if not (np.isfinite(lo) and np.isfinite(hi)) or hi <= lo:
            raise ConfigError(f"{name} extent must be finite and strictly increasing, got {tuple(lim)}.")
        ext.append((lo, hi))
    nel = _as_triplet(element_counts, "element_counts")
    nmark = _as_triplet(markers_per_cell, "markers_per_cell")

    x, y, z = (_marker_axis(ext[d], nel[d], nmark[d]) for d in range(3))
    shape = (x.size, y.size, z.size)
    grid = Grid(
        extents=tuple(ext),
        element_counts=nel,
        markers_per_cell=nmark,
        x=x,
        y=y,
        z=z,
        phase=np.full(shape, int(background_phase), dtype=np.int32),
        temperature=np.full(shape, float(background_temperature), dtype=float),
    )
    logger.debug(f"Allocated grid with {nel} elements and field shape {shape}.")
    return grid


def position_of(grid: Grid, index: tuple[int, int, int]) -> Point3D:
    """Return the ``(x, y, z)`` coordinates [km] of a field index."""

    return grid.position_of(index)


def node_coordinates(grid: Grid, axis: int) -> Array:
    """Element node coordinates along ``axis`` (``nel + 1`` values)."""

    if axis not in (0, 1, 2):
        raise ConfigError("axis must be 0, 1 or 2.")
    lo, hi = grid.extents[axis]
    return np.linspace(lo, hi, grid.element_counts[axis] + 1)
