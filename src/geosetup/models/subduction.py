"""Ready-made 2D ocean-continent subduction setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from geosetup.core import (
    AdiabaticTemp,
    Box,
    Grid,
    HalfspaceCoolingTemp,
    SpreadingRateTemp,
    allocate_grid,
    apply_adiabat,
    apply_all,
    layers_from_interfaces,
    spreading_age,
)
from geosetup.errors import ConfigError
from geosetup.modeling import (
    MaterialDatabase,
    ModelBundle,
    Phase,
    RunParams,
    ScalingSystem,
    SofteningLaw,
    SolverOptions,
    TimeStepping,
    assemble,
)


logger = logging.getLogger(__name__)

MANTLE = 0
OCEANIC_CRUST = 1
LITHOSPHERIC_MANTLE = 2
UPPER_CRUST = 3
LOWER_CRUST = 4


@dataclass(frozen=True)
class SubductionParams:
    """Geometry and thermal knobs; lengths in km, ages in Myr, temperatures in degC."""

    xlim: tuple[float, float] = (-2000.0, 2000.0)
    ylim: tuple[float, float] = (-2.5, 2.5)
    zlim: tuple[float, float] = (-660.0, 0.0)
    element_counts: tuple[int, int, int] = (256, 1, 64)
    markers_per_cell: tuple[int, int, int] = (2, 1, 2)
    surface_temperature: float = 20.0
    mantle_temperature: float = 1280.0
    tlab: float = 1250.0
    adiabat: float = 0.4  # degC/km
    trench_x: float = 0.0
    oceanic_interfaces: tuple[float, ...] = (20.0, 80.0)
    continental_interfaces: tuple[float, ...] = (20.0, 35.0, 120.0)
    plate_thickness: float = 150.0
    spreading_velocity: float = 0.5  # cm/yr
    age_at_ridge: float = 0.01
    max_ocean_age: float = 80.0
    continent_age: float = 120.0
    slab_length: float = 300.0
    slab_dip: float = 30.0
    time: TimeStepping = field(
        default_factory=lambda: TimeStepping(
            time_end=20.0, dt=0.05, dt_min=1.0e-4, dt_max=0.1, nstep_max=400, nstep_out=10
        )
    )
    solver: SolverOptions = field(
        default_factory=lambda: SolverOptions(
            solver_type="multigrid",
            mg_levels=4,
            flags=(("-snes_ksp_ew", None), ("-snes_rtol", "5e-3")),
        )
    )

    def __post_init__(self) -> None:
        if not self.xlim[0] < self.trench_x < self.xlim[1]:
            raise ConfigError("trench_x must lie inside xlim.")
        if self.plate_thickness <= max(self.oceanic_interfaces[-1], self.continental_interfaces[-1]):
            raise ConfigError("plate_thickness must exceed the deepest layer interface.")


def subduction_materials() -> MaterialDatabase:
    """Mantle base phase plus crustal phases derived from it."""

    db = MaterialDatabase()
    db.register_softening(SofteningLaw(id=0, aps1=0.1, aps2=0.5, a=0.9))
    mantle = db.register(
        Phase(
            id=MANTLE,
            name="mantle",
            rho=3300.0,
            alpha=3.0e-5,
            k=3.0,
            cp=1050.0,
            shear_modulus=5.0e10,
            cohesion=10.0e6,
            friction=30.0,
            dislocation_law="Dry_Olivine-Hirth_Kohlstedt_2003",
            diffusion_law="Dry_Olivine_diff-Hirth_Kohlstedt_2003",
            ch_soft_id=0,
            fr_soft_id=0,
        )
    )
    db.derive(
        mantle,
        {
            "name": "oceanic_crust",
            "rho": 3000.0,
            "k": 2.5,
            "cohesion": 5.0e6,
            "friction": 5.0,
            "dislocation_law": "Wet_Plagioclase-Rybacki_Dresen_2000",
            "diffusion_law": None,
        },
        new_id=OCEANIC_CRUST,
    )
    db.derive(mantle, {"name": "lithospheric_mantle"}, new_id=LITHOSPHERIC_MANTLE)
    upper = db.derive(
        OCEANIC_CRUST,
        {"name": "upper_crust", "rho": 2700.0, "radiogenic_heat": 1.0e-6, "friction": 20.0},
        new_id=UPPER_CRUST,
    )
    db.derive(upper, {"name": "lower_crust", "rho": 2850.0, "radiogenic_heat": 0.5e-6}, new_id=LOWER_CRUST)
    return db


def subduction_regions(params: SubductionParams, grid: Grid) -> list[Box]:
    """Oceanic plate, overriding plate and dipping slab, in painting order."""

    zlim = (-params.plate_thickness, 0.0)
    ocean_layers = layers_from_interfaces(params.oceanic_interfaces, (OCEANIC_CRUST, LITHOSPHERIC_MANTLE, MANTLE))
    ocean = Box(
        xlim=(params.xlim[0], params.trench_x),
        ylim=grid.extents[1],
        zlim=zlim,
        layers=ocean_layers,
        thermal=SpreadingRateTemp(
            surface=params.surface_temperature,
            mantle=params.mantle_temperature,
            ridge_side="left",
            spreading_velocity=params.spreading_velocity,
            age_at_ridge=params.age_at_ridge,
            max_age=params.max_ocean_age,
        ),
        tlab=params.tlab,
        asthenosphere_phase=MANTLE,
    )
    continent = Box(
        xlim=(params.trench_x, params.xlim[1]),
        ylim=grid.extents[1],
        zlim=zlim,
        layers=layers_from_interfaces(
            params.continental_interfaces, (UPPER_CRUST, LOWER_CRUST, LITHOSPHERIC_MANTLE, MANTLE)
        ),
        thermal=HalfspaceCoolingTemp(
            surface=params.surface_temperature,
            mantle=params.mantle_temperature,
            age=params.continent_age,
        ),
        tlab=params.tlab,
        asthenosphere_phase=MANTLE,
    )
    # The slab carries the plate age at the trench.
    slab_age = float(spreading_age(ocean.lateral_range[1], ocean.thermal, ocean.lateral_range))
    slab = Box(
        xlim=(params.trench_x, params.trench_x + params.slab_length),
        ylim=grid.extents[1],
        zlim=(-params.oceanic_interfaces[-1], 0.0),
        layers=ocean_layers,
        thermal=HalfspaceCoolingTemp(
            surface=params.surface_temperature,
            mantle=params.mantle_temperature,
            age=slab_age,
        ),
        origin=(params.trench_x, grid.extents[1][0], 0.0),
        dip=params.slab_dip,
        tlab=params.tlab,
        asthenosphere_phase=MANTLE,
    )
    return [ocean, continent, slab]


def subduction_setup(params: SubductionParams | None = None, workers: int = 1) -> ModelBundle:
    params = params or SubductionParams()
    grid = allocate_grid(
        extents=(params.xlim, params.ylim, params.zlim),
        element_counts=params.element_counts,
        markers_per_cell=params.markers_per_cell,
        background_phase=MANTLE,
        background_temperature=params.mantle_temperature,
    )
    regions = subduction_regions(params, grid)
    apply_all(grid, regions, workers=workers)
    apply_adiabat(grid, AdiabaticTemp(gradient=params.adiabat))

    scaling = ScalingSystem.from_units(
        length=(1000.0, "km"),
        stress=(10.0, "MPa"),
        viscosity=(1.0e20, "Pa*s"),
        temperature=(1000.0, "C"),
    )
    logger.info(f"Painted subduction setup with {len(regions)} regions.")
    return assemble(grid, scaling, subduction_materials(), RunParams(time=params.time, solver=params.solver))
