"""Core data structures for grid-based model setups.

Coordinates are in km with ``z`` pointing up (depths below the surface are
negative ``z``). Temperatures are in degrees Celsius.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from geosetup.errors import ConfigError

if TYPE_CHECKING:
    from geosetup.core.thermal import ThermalProfile


Array = np.ndarray
Extent = tuple[float, float]
Point3D = tuple[float, float, float]


@dataclass(frozen=True)
class Grid:
    """Structured 3D grid with phase and temperature sampled at markers.

    ``x``, ``y`` and ``z`` hold the marker coordinates per axis; ``phase`` and
    ``temperature`` are dense ``(nx, ny, nz)`` fields. The fields are mutable
    in place; the geometry is not.
    """

    extents: tuple[Extent, Extent, Extent]
    element_counts: tuple[int, int, int]
    markers_per_cell: tuple[int, int, int]
    x: Array
    y: Array
    z: Array
    phase: Array
    temperature: Array

    def __post_init__(self) -> None:
        shape = (self.x.size, self.y.size, self.z.size)
        if self.phase.shape != shape:
            raise ConfigError("phase field must have shape (nx, ny, nz).")
        if self.temperature.shape != shape:
            raise ConfigError("temperature field must have shape (nx, ny, nz).")

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.x.size, self.y.size, self.z.size)

    @property
    def axes(self) -> tuple[Array, Array, Array]:
        return (self.x, self.y, self.z)

    def position_of(self, index: tuple[int, int, int]) -> Point3D:
        for axis, (n, value) in enumerate(zip(self.shape, index)):
            if not 0 <= value < n:
                raise IndexError(f"Index {value} is out of range for axis {axis} with {n} markers.")
        i, j, k = index
        return (float(self.x[i]), float(self.y[j]), float(self.z[k]))

    def mesh(self, rows: slice = slice(None)) -> tuple[Array, Array, Array]:
        """Return 3D coordinate arrays, optionally for a slab of x-rows."""

        return tuple(np.meshgrid(self.x[rows], self.y, self.z, indexing="ij"))

    def frozen_copy(self) -> "Grid":
        """Return a copy whose fields cannot be written."""

        arrays = {}
        for name in ("x", "y", "z", "phase", "temperature"):
            arr = np.array(getattr(self, name), copy=True)
            arr.flags.writeable = False
            arrays[name] = arr
        return Grid(
            extents=self.extents,
            element_counts=self.element_counts,
            markers_per_cell=self.markers_per_cell,
            **arrays,
        )


@dataclass(frozen=True)
class PhaseLayer:
    """Phase assigned between two depths [km] below a region's top."""

    top: float
    bottom: float
    phase: int

    def __post_init__(self) -> None:
        if self.top < 0.0:
            raise ConfigError("PhaseLayer top must be non-negative.")
        if self.bottom <= self.top:
            raise ConfigError("PhaseLayer bottom must be deeper than its top.")


def constant_layers(phase: int) -> tuple[PhaseLayer, ...]:
    """Single layer filling a whole region with ``phase``."""

    return (PhaseLayer(top=0.0, bottom=np.inf, phase=int(phase)),)


def layers_from_interfaces(depths: Sequence[float], phases: Sequence[int]) -> tuple[PhaseLayer, ...]:
    """Build layers from the bottom depth of each layer.

    ``phases`` holds one entry more than ``depths``; the extra trailing phase
    fills everything below the last interface. ``([20, 80], [1, 2, 0])`` gives
    phase 1 over 0-20 km, phase 2 over 20-80 km and phase 0 below.
    """

    depths = [float(d) for d in depths]
    if len(phases) not in (len(depths), len(depths) + 1):
        raise ConfigError("phases must have len(depths) or len(depths) + 1 entries.")
    if any(d <= 0.0 for d in depths) or any(b <= a for a, b in zip(depths, depths[1:])):
        raise ConfigError("Layer interface depths must be positive and strictly increasing.")

    layers = []
    top = 0.0
    for bottom, phase in zip(depths, phases):
        layers.append(PhaseLayer(top=top, bottom=bottom, phase=int(phase)))
        top = bottom
    if len(phases) == len(depths) + 1:
        layers.append(PhaseLayer(top=top, bottom=np.inf, phase=int(phases[-1])))
    return tuple(layers)


def rotation_matrix(strike: float, dip: float) -> Array:
    """World-to-local rotation: strike about the vertical, then dip.

    Positive ``strike`` [deg] turns the local x axis counterclockwise seen from
    above; positive ``dip`` [deg] tilts the local x axis downward.
    """

    cs, ss = np.cos(np.deg2rad(strike)), np.sin(np.deg2rad(strike))
    cd, sd = np.cos(np.deg2rad(dip)), np.sin(np.deg2rad(dip))
    rot_strike = np.array([[cs, ss, 0.0], [-ss, cs, 0.0], [0.0, 0.0, 1.0]])
    rot_dip = np.array([[cd, 0.0, -sd], [0.0, 1.0, 0.0], [sd, 0.0, cd]])
    return rot_dip @ rot_strike


def _to_local(rot: Array, origin: Point3D, x: Array, y: Array, z: Array) -> tuple[Array, Array, Array]:
    dx = np.asarray(x, dtype=float) - origin[0]
    dy = np.asarray(y, dtype=float) - origin[1]
    dz = np.asarray(z, dtype=float) - origin[2]
    lx = rot[0, 0] * dx + rot[0, 1] * dy + rot[0, 2] * dz
    ly = rot[1, 0] * dx + rot[1, 1] * dy + rot[1, 2] * dz
    lz = rot[2, 0] * dx + rot[2, 1] * dy + rot[2, 2] * dz
    return lx, ly, lz


def _world_bounds(rot: Array, origin: Point3D, corners: Array) -> tuple[Extent, Extent, Extent]:
    world = corners @ rot + np.asarray(origin, dtype=float)
    lo = world.min(axis=0)
    hi = world.max(axis=0)
    return tuple((float(lo[d]), float(hi[d])) for d in range(3))


def _check_limits(name: str, lim: Extent) -> Extent:
    lo, hi = float(lim[0]), float(lim[1])
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise ConfigError(f"{name} must be finite, got {lim}.")
    if not hi > lo:
        raise ConfigError(f"{name} must be strictly increasing, got {lim}.")
    return (lo, hi)


def _check_layers(layers: tuple[PhaseLayer, ...]) -> None:
    if len(layers) == 0:
        raise ConfigError("A region needs at least one phase layer.")
    for layer in layers:
        if not isinstance(layer, PhaseLayer):
            raise ConfigError("Region layers must be PhaseLayer instances.")


@dataclass(frozen=True)
class Box:
    """Box region, optionally rotated by strike and dip about ``origin``.

    Limits are world coordinates of the unrotated box. Rotation happens about
    ``origin``, which defaults to the top corner ``(xlim[0], ylim[0], zlim[1])``.
    Layers are measured downward from the box top.
    """

    xlim: Extent
    ylim: Extent
    zlim: Extent
    layers: tuple[PhaseLayer, ...]
    thermal: ThermalProfile | None = None
    origin: Point3D | None = None
    strike: float = 0.0
    dip: float = 0.0
    tlab: float | None = None
    asthenosphere_phase: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "xlim", _check_limits("xlim", self.xlim))
        object.__setattr__(self, "ylim", _check_limits("ylim", self.ylim))
        object.__setattr__(self, "zlim", _check_limits("zlim", self.zlim))
        object.__setattr__(self, "layers", tuple(self.layers))
        _check_layers(self.layers)
        if self.origin is None:
            object.__setattr__(self, "origin", (self.xlim[0], self.ylim[0], self.zlim[1]))
        elif len(self.origin) != 3:
            raise ConfigError("origin must be a 3D point.")

    @classmethod
    def spanning(cls, grid: Grid, zlim: Extent, layers: tuple[PhaseLayer, ...], **kwargs) -> "Box":
        """Horizontal layer covering the grid laterally."""

        return cls(xlim=grid.extents[0], ylim=grid.extents[1], zlim=zlim, layers=layers, **kwargs)

    @property
    def rotation(self) -> Array:
        return rotation_matrix(self.strike, self.dip)

    @property
    def local_limits(self) -> tuple[Extent, Extent, Extent]:
        o = self.origin
        return (
            (self.xlim[0] - o[0], self.xlim[1] - o[0]),
            (self.ylim[0] - o[1], self.ylim[1] - o[1]),
            (self.zlim[0] - o[2], self.zlim[1] - o[2]),
        )

    @property
    def thickness(self) -> float:
        return self.zlim[1] - self.zlim[0]

    @property
    def lateral_range(self) -> Extent:
        return self.local_limits[0]

    def to_local(self, x: Array, y: Array, z: Array) -> tuple[Array, Array, Array]:
        return _to_local(self.rotation, self.origin, x, y, z)

    def contains(self, lx: Array, ly: Array, lz: Array) -> Array:
        (x0, x1), (y0, y1), (z0, z1) = self.local_limits
        return (lx >= x0) & (lx <= x1) & (ly >= y0) & (ly <= y1) & (lz >= z0) & (lz <= z1)

    def depth(self, lz: Array) -> Array:
        return self.local_limits[2][1] - lz

    def world_bounds(self) -> tuple[Extent, Extent, Extent]:
        (x0, x1), (y0, y1), (z0, z1) = self.local_limits
        corners = np.array([[x, y, z] for x in (x0, x1) for y in (y0, y1) for z in (z0, z1)])
        return _world_bounds(self.rotation, self.origin, corners)


@dataclass(frozen=True)
class Ellipsoid:
    """Ellipsoidal region with semi-axes ``axes`` [km] about ``center``.

    Depth is measured below the local top of the ellipsoid, ``axes[2]`` above
    the center along the rotated vertical.
    """

    center: Point3D
    axes: tuple[float, float, float]
    layers: tuple[PhaseLayer, ...]
    thermal: ThermalProfile | None = None
    strike: float = 0.0
    dip: float = 0.0
    tlab: float | None = None
    asthenosphere_phase: int = 0

    def __post_init__(self) -> None:
        if len(self.center) != 3 or len(self.axes) != 3:
            raise ConfigError("Ellipsoid center and axes must be 3D.")
        if not np.all(np.isfinite(self.center)):
            raise ConfigError("Ellipsoid center must be finite.")
        if any(not (np.isfinite(a) and a > 0.0) for a in self.axes):
            raise ConfigError("Ellipsoid semi-axes must be positive and finite.")
        object.__setattr__(self, "layers", tuple(self.layers))
        _check_layers(self.layers)

    @property
    def rotation(self) -> Array:
        return rotation_matrix(self.strike, self.dip)

    @property
    def thickness(self) -> float:
        return 2.0 * self.axes[2]

    @property
    def lateral_range(self) -> Extent:
        return (-self.axes[0], self.axes[0])

    def to_local(self, x: Array, y: Array, z: Array) -> tuple[Array, Array, Array]:
        return _to_local(self.rotation, self.center, x, y, z)

    def contains(self, lx: Array, ly: Array, lz: Array) -> Array:
        a, b, c = self.axes
        return (lx / a) ** 2 + (ly / b) ** 2 + (lz / c) ** 2 <= 1.0

    def depth(self, lz: Array) -> Array:
        return self.axes[2] - lz

    def world_bounds(self) -> tuple[Extent, Extent, Extent]:
        a, b, c = self.axes
        corners = np.array([[x, y, z] for x in (-a, a) for y in (-b, b) for z in (-c, c)])
        return _world_bounds(self.rotation, self.center, corners)


Region = Box | Ellipsoid
