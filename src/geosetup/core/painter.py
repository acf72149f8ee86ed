"""Paint ordered geometric regions onto a grid's phase and temperature fields."""

from __future__ import annotations

import logging
import warnings
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from geosetup.core.thermal import AdiabaticTemp, adiabat, check_profile, evaluate_profile
from geosetup.core.types import Grid, Region
from geosetup.errors import ConfigError, GeometryWarning


logger = logging.getLogger(__name__)


def _overlap_state(grid: Grid, region: Region) -> str:
    """Return ``"none"``, ``"partial"`` or ``"full"`` from bounding boxes."""

    bounds = region.world_bounds()
    state = "full"
    for (lo, hi), (glo, ghi) in zip(bounds, grid.extents):
        if hi < glo or lo > ghi:
            return "none"
        if lo < glo or hi > ghi:
            state = "partial"
    return state


def _check_region(grid: Grid, region: Region, position: int) -> bool:
    state = _overlap_state(grid, region)
    if state == "none":
        warnings.warn(
            f"Region {position} ({type(region).__name__}) lies entirely outside the grid and paints nothing.",
            GeometryWarning,
            stacklevel=3,
        )
        return False
    if state == "partial":
        logger.warning(f"Region {position} ({type(region).__name__}) only partially overlaps the grid.")
    return True


def _paint(grid: Grid, region: Region, rows: slice) -> int:
    """Paint ``region`` onto the x-rows ``rows``; return the painted point count."""

    x, y, z = grid.mesh(rows)
    lx, ly, lz = region.to_local(x, y, z)
    inside = region.contains(lx, ly, lz)
    n_inside = int(np.count_nonzero(inside))
    if n_inside == 0:
        return 0

    phase_view = grid.phase[rows]
    temp_view = grid.temperature[rows]

    depth = region.depth(lz[inside])
    phase = phase_view[inside]
    matched = np.zeros(depth.shape, dtype=bool)
    for layer in region.layers:
        sel = ~matched & (depth >= layer.top) & (depth <= layer.bottom)
        phase[sel] = layer.phase
        matched |= sel

    if region.thermal is not None:
        temp = evaluate_profile(
            region.thermal,
            depth,
            lx[inside],
            lateral_range=region.lateral_range,
            thickness=region.thickness,
        )
        temp_view[inside] = temp
    else:
        temp = temp_view[inside]

    if region.tlab is not None:
        phase[matched & (temp > region.tlab)] = region.asthenosphere_phase

    phase_view[inside] = phase
    return n_inside


def _check_worker_count(workers: int) -> int:
    workers = int(workers)
    if workers < 1:
        raise ConfigError(f"workers must be >= 1, got {workers}.")
    return workers


def apply_region(grid: Grid, region: Region) -> int:
    """Paint one region onto ``grid`` in place and return the painted point count.

    Points inside the region take the phase of the first layer containing
    their depth below the region top (unchanged if none does), then the
    region temperature; layered points hotter than ``region.tlab`` become
    ``region.asthenosphere_phase``. Points outside are left untouched.
    """

    check_profile(region.thermal, region.thickness)
    if not _check_region(grid, region, 0):
        return 0
    painted = _paint(grid, region, slice(None))
    if painted == 0:
        warnings.warn(
            f"{type(region).__name__} region contains no grid point and paints nothing.",
            GeometryWarning,
            stacklevel=2,
        )
    logger.debug(f"Painted {painted} points with {type(region).__name__}.")
    return painted


def _row_chunks(nx: int, workers: int) -> list[slice]:
    edges = np.linspace(0, nx, min(workers, nx) + 1).astype(int)
    return [slice(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def apply_all(grid: Grid, regions: Sequence[Region], workers: int = 1) -> list[int]:
    """Paint ``regions`` in order; a later region overwrites earlier ones.

    With ``workers > 1`` the grid is split into disjoint x-slabs and every
    worker paints the full ordered region list onto its own slab. Returns the
    number of points painted by each region.
    """

    workers = _check_worker_count(workers)
    regions = list(regions)
    # Fail before any region touches the grid.
    for region in regions:
        check_profile(region.thermal, region.thickness)
    active = [_check_region(grid, region, i) for i, region in enumerate(regions)]
    chunks = _row_chunks(grid.shape[0], workers)

    def _run(rows: slice) -> list[int]:
        return [_paint(grid, region, rows) if ok else 0 for region, ok in zip(regions, active)]

    if len(chunks) == 1:
        per_chunk = [_run(chunks[0])]
    else:
        with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
            per_chunk = list(executor.map(_run, chunks))

    counts = [int(sum(c[i] for c in per_chunk)) for i in range(len(regions))]
    for i, (region, ok, count) in enumerate(zip(regions, active, counts)):
        if ok and count == 0:
            warnings.warn(
                f"Region {i} ({type(region).__name__}) contains no grid point and paints nothing.",
                GeometryWarning,
                stacklevel=2,
            )
    logger.debug(f"Painted {len(regions)} regions using {len(chunks)} slab(s): {counts}.")
    return counts


def apply_adiabat(grid: Grid, profile: AdiabaticTemp) -> None:
    """Add the adiabatic increase ``-(z - surface) * gradient`` to the whole grid."""

    if not isinstance(profile, AdiabaticTemp):
        raise ConfigError("apply_adiabat expects an AdiabaticTemp profile.")
    grid.temperature[...] += adiabat(grid.z, profile)[np.newaxis, np.newaxis, :]
