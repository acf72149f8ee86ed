import numpy as np
import pytest

from geosetup.core import Box, allocate_grid, apply_region, constant_layers
from geosetup.errors import ConfigError
from geosetup.modeling import (
    MaterialDatabase,
    Phase,
    RunParams,
    ScalingSystem,
    SofteningLaw,
    SolverOptions,
    TimeStepping,
    assemble,
)
from geosetup.modeling.units import SECONDS_PER_MYR


def _scaling() -> ScalingSystem:
    return ScalingSystem.from_units(
        length=(100.0, "km"),
        stress=(10.0, "MPa"),
        viscosity=(1.0e20, "Pa*s"),
        temperature=(1000.0, "K"),
    )


def _materials() -> MaterialDatabase:
    db = MaterialDatabase()
    db.register_softening(SofteningLaw(id=0, aps1=0.1, aps2=0.5, a=0.9, lm=2.0))
    mantle = db.register(
        Phase(
            id=0,
            name="mantle",
            rho=3300.0,
            cohesion=10.0e6,
            friction=30.0,
            dislocation_law="Dry_Olivine-Hirth_Kohlstedt_2003",
            ch_soft_id=0,
            fr_soft_id=0,
        )
    )
    db.derive(mantle, {"name": "crust", "rho": 2700.0, "eta": 1.0e22}, new_id=1)
    return db


def _grid():
    grid = allocate_grid(((0.0, 100.0), (0.0, 10.0), (-100.0, 0.0)), (10, 1, 10), background_temperature=1000.0)
    apply_region(grid, Box(xlim=(0.0, 100.0), ylim=(0.0, 10.0), zlim=(-20.0, 0.0), layers=constant_layers(1)))
    return grid


def test_assemble_nondimensionalizes_materials_and_temperature() -> None:
    scaling = _scaling()
    bundle = assemble(_grid(), scaling, _materials())

    assert bundle.phase_ids == (0, 1)
    crust = bundle.phase(1)
    assert crust.rho == pytest.approx(scaling.nondimensionalize(2700.0, "kg/m^3"))
    assert crust.eta == pytest.approx(1.0e2)
    assert crust.cohesion == pytest.approx(1.0)
    # Angles and names pass through unchanged.
    assert crust.friction == pytest.approx(30.0)
    assert crust.name == "crust"
    assert crust.dislocation_law == "Dry_Olivine-Hirth_Kohlstedt_2003"
    assert bundle.softening_laws[0].lm == pytest.approx(0.02)
    assert bundle.softening_laws[0].aps2 == pytest.approx(0.5)

    assert np.allclose(bundle.temperature, 1.27315)
    assert np.allclose(bundle.grid.temperature, 1000.0)
    assert set(np.unique(bundle.grid.phase)) == {0, 1}
    with pytest.raises(KeyError):
        bundle.phase(5)


def test_run_parameters_are_nondimensionalized() -> None:
    scaling = _scaling()
    run = RunParams(
        time=TimeStepping(time_end=10.0, dt=0.1, dt_min=0.01, dt_max=0.5),
        solver=SolverOptions.with_flags({"-snes_rtol": 1e-3, "-pc_view": None}, solver_type="Multigrid", mg_levels=3),
    )
    bundle = assemble(_grid(), scaling, _materials(), run)
    t = scaling.time_scale
    assert bundle.run.time.time_end == pytest.approx(10.0 * SECONDS_PER_MYR / t)
    assert bundle.run.time.dt == pytest.approx(0.1 * SECONDS_PER_MYR / t)
    assert bundle.run.time.nstep_max == run.time.nstep_max
    assert bundle.run.gravity[2] == pytest.approx(-9.81 / scaling.scale("acceleration"))
    assert bundle.run.solver.solver_type == "multigrid"
    assert bundle.run.solver.flags == (("-snes_rtol", "0.001"), ("-pc_view", None))


def test_bundle_is_read_only_and_detached() -> None:
    grid = _grid()
    bundle = assemble(grid, _scaling(), _materials())
    with pytest.raises(ValueError):
        bundle.grid.phase[0, 0, 0] = 1
    with pytest.raises(ValueError):
        bundle.temperature[0, 0, 0] = 0.0
    grid.phase[...] = 9
    grid.temperature[...] = 0.0
    assert not np.any(bundle.grid.phase == 9)
    assert np.allclose(bundle.grid.temperature, 1000.0)


def test_missing_phase_is_reported() -> None:
    grid = _grid()
    grid.phase[0, 0, 0] = 6
    with pytest.raises(ConfigError, match=r"Phase ids \[6\]"):
        assemble(grid, _scaling(), _materials())


def test_unresolved_softening_reference() -> None:
    db = MaterialDatabase()
    db.register(Phase(id=0, fr_soft_id=3))
    db.register(Phase(id=1))
    with pytest.raises(ConfigError, match="fr_soft_id=3"):
        assemble(_grid(), _scaling(), db)


def test_unknown_creep_law_and_wrong_kind() -> None:
    db = MaterialDatabase()
    db.register(Phase(id=0, dislocation_law="Made_Up-Law"))
    db.register(Phase(id=1))
    with pytest.raises(ConfigError, match="unknown creep law"):
        assemble(_grid(), _scaling(), db)

    db = MaterialDatabase()
    db.register(Phase(id=0, diffusion_law="Wet_Olivine-Hirth_Kohlstedt_2003"))
    db.register(Phase(id=1))
    with pytest.raises(ConfigError, match="not a diffusion law"):
        assemble(_grid(), _scaling(), db)


def test_non_finite_temperature_is_rejected() -> None:
    grid = _grid()
    grid.temperature[1, 0, 2] = np.nan
    with pytest.raises(ConfigError, match="non-finite"):
        assemble(grid, _scaling(), _materials())


@pytest.mark.parametrize(
    "kwargs",
    [
        {"time_end": 0.0},
        {"dt": 1.0, "dt_max": 0.5},
        {"dt_min": 0.0},
        {"nstep_out": 0},
    ],
)
def test_invalid_time_stepping(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        TimeStepping(**kwargs)


def test_invalid_solver_options() -> None:
    with pytest.raises(ConfigError):
        SolverOptions(solver_type="iterative")
    with pytest.raises(ConfigError):
        SolverOptions(solver_type="multigrid", mg_levels=1)
    with pytest.raises(ConfigError):
        SolverOptions(flags=(("", "1"),))
