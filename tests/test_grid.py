import numpy as np
import pytest

from geosetup.core import allocate_grid, node_coordinates, position_of
from geosetup.errors import ConfigError


def test_marker_coordinates_and_background_fields() -> None:
    grid = allocate_grid(
        extents=((0.0, 100.0), (0.0, 10.0), (-50.0, 0.0)),
        element_counts=(10, 1, 5),
        markers_per_cell=2,
        background_phase=3,
        background_temperature=1350.0,
    )
    assert grid.shape == (20, 2, 10)
    assert grid.phase.shape == grid.temperature.shape == grid.shape
    assert grid.phase.dtype == np.int32
    assert np.all(grid.phase == 3)
    assert np.all(grid.temperature == 1350.0)
    assert np.isclose(grid.x[0], 2.5)
    assert np.isclose(grid.x[-1], 97.5)
    assert np.allclose(np.diff(grid.z), 5.0)


def test_position_of_is_a_lookup() -> None:
    grid = allocate_grid(((0.0, 100.0), (0.0, 10.0), (-50.0, 0.0)), (10, 1, 5), markers_per_cell=(2, 2, 2))
    assert position_of(grid, (0, 0, 0)) == pytest.approx((2.5, 2.5, -47.5))
    assert grid.position_of((19, 1, 9)) == pytest.approx((97.5, 7.5, -2.5))
    with pytest.raises(IndexError):
        position_of(grid, (20, 0, 0))
    with pytest.raises(IndexError):
        grid.position_of((-1, 0, 0))
    with pytest.raises(IndexError):
        position_of(grid, (0, 0, -10))


def test_node_coordinates() -> None:
    grid = allocate_grid(((0.0, 100.0), (0.0, 10.0), (-50.0, 0.0)), (10, 1, 5))
    assert np.allclose(node_coordinates(grid, 0), np.linspace(0.0, 100.0, 11))
    assert node_coordinates(grid, 1).size == 2
    with pytest.raises(ConfigError):
        node_coordinates(grid, 3)


def test_mesh_slab_matches_axes() -> None:
    grid = allocate_grid(((0.0, 4.0), (0.0, 1.0), (0.0, 2.0)), (4, 1, 2))
    x, y, z = grid.mesh(slice(1, 3))
    assert x.shape == (2, 1, 2)
    assert np.allclose(x[:, 0, 0], grid.x[1:3])
    assert np.allclose(z[0, 0, :], grid.z)


@pytest.mark.parametrize(
    ("extents", "counts"),
    [
        (((0.0, 100.0), (0.0, 10.0), (-50.0, 0.0)), (10, 0, 5)),
        (((0.0, 100.0), (0.0, 10.0), (-50.0, 0.0)), (10, 1, -2)),
        (((100.0, 0.0), (0.0, 10.0), (-50.0, 0.0)), (10, 1, 5)),
        (((0.0, 100.0), (10.0, 10.0), (-50.0, 0.0)), (10, 1, 5)),
        (((0.0, 100.0), (-50.0, 0.0)), (10, 5)),
    ],
)
def test_invalid_grids(extents, counts) -> None:
    with pytest.raises(ConfigError):
        allocate_grid(extents, counts)


def test_invalid_marker_count() -> None:
    with pytest.raises(ConfigError, match="markers_per_cell"):
        allocate_grid(((0.0, 1.0), (0.0, 1.0), (0.0, 1.0)), 1, markers_per_cell=0)


def test_frozen_copy_is_read_only_and_detached() -> None:
    grid = allocate_grid(((0.0, 1.0), (0.0, 1.0), (0.0, 1.0)), 2, background_phase=1)
    frozen = grid.frozen_copy()
    with pytest.raises(ValueError):
        frozen.phase[0, 0, 0] = 5
    grid.phase[0, 0, 0] = 5
    assert frozen.phase[0, 0, 0] == 1
