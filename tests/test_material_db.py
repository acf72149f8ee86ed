from dataclasses import replace

import numpy as np
import pytest

from geosetup.errors import ConfigError
from geosetup.modeling import (
    MaterialDatabase,
    Phase,
    SofteningLaw,
    get_creep_law,
    list_creep_laws,
    validate_rheology_references,
    validate_softening_references,
)


def _base() -> Phase:
    return Phase(id=0, name="mantle", rho=3300.0, cohesion=10.0e6, friction=30.0, ch_soft_id=0)


def test_derive_equals_replace_with_new_id() -> None:
    db = MaterialDatabase()
    base = db.register(_base())
    derived = db.derive(base, {"rho": 2700.0}, new_id=3)
    assert derived == replace(base, id=3, rho=2700.0)
    assert db.phase(3) is derived
    assert db.phase(0) is base
    assert db.phase_ids == (0, 3)
    with pytest.raises(ConfigError, match="already registered"):
        db.derive(base, {"rho": 2800.0}, new_id=3)


def test_derive_by_id_and_chaining() -> None:
    db = MaterialDatabase()
    db.register(_base())
    upper = db.derive(0, {"name": "upper", "rho": 2700.0, "radiogenic_heat": 1.0e-6}, new_id=3)
    lower = db.derive(upper, {"name": "lower", "rho": 2850.0}, new_id=4)
    assert lower.radiogenic_heat == pytest.approx(1.0e-6)
    assert lower.cohesion == pytest.approx(10.0e6)
    assert [p.id for p in db] == [0, 3, 4]
    assert len(db) == 3
    assert 4 in db and 5 not in db


@pytest.mark.parametrize(
    ("overrides", "new_id", "match"),
    [
        ({}, 0, "reuse the base"),
        ({"id": 7}, 7, "new_id"),
        ({"density": 2700.0}, 7, "Unknown phase fields"),
        ({"rho": -1.0}, 7, "rho must be positive"),
    ],
)
def test_derive_rejects_bad_input(overrides: dict, new_id: int, match: str) -> None:
    db = MaterialDatabase()
    db.register(_base())
    with pytest.raises(ConfigError, match=match):
        db.derive(0, overrides, new_id=new_id)
    assert db.phase_ids == (0,)


def test_unknown_ids_and_collisions() -> None:
    db = MaterialDatabase()
    db.register(_base())
    with pytest.raises(ConfigError, match="already registered"):
        db.register(Phase(id=0))
    with pytest.raises(ConfigError, match="Unknown phase id"):
        db.phase(9)
    with pytest.raises(ConfigError, match="Unknown phase id"):
        db.derive(9, {}, new_id=10)
    db.register_softening(SofteningLaw(id=0, aps1=0.1, aps2=0.5, a=0.9))
    with pytest.raises(ConfigError, match="already registered"):
        db.register_softening(SofteningLaw(id=0, aps1=0.0, aps2=1.0, a=0.5))
    with pytest.raises(ConfigError, match="Unknown softening"):
        db.softening(2)


def test_softening_reference_resolved_late() -> None:
    db = MaterialDatabase()
    db.register(_base())
    with pytest.raises(ConfigError, match="does not match a softening law"):
        validate_softening_references(db)
    db.register_softening(SofteningLaw(id=0, aps1=0.1, aps2=0.5, a=0.9))
    validate_softening_references(db)


def test_rheology_references() -> None:
    db = MaterialDatabase()
    db.register(Phase(id=0, dislocation_law="Dry_Olivine-Hirth_Kohlstedt_2003"))
    db.register(Phase(id=1, diffusion_law="Dry_Olivine_diff-Hirth_Kohlstedt_2003"))
    validate_rheology_references(db)

    db.register(Phase(id=2, dislocation_law="Dry_Olivine_diff-Hirth_Kohlstedt_2003"))
    with pytest.raises(ConfigError, match="diffusion law"):
        validate_rheology_references(db)

    other = MaterialDatabase()
    other.register(Phase(id=0, dislocation_law="Cheese-Unknown_2024"))
    with pytest.raises(ConfigError, match="unknown creep law"):
        validate_rheology_references(other)


def test_creep_law_catalog() -> None:
    law = get_creep_law("Wet_Plagioclase-Rybacki_Dresen_2000")
    assert law.kind == "dislocation"
    assert law.n > 1.0
    assert all(get_creep_law(name).kind == "diffusion" for name in list_creep_laws("diffusion"))
    assert set(list_creep_laws()) == set(list_creep_laws("dislocation")) | set(list_creep_laws("diffusion"))
    with pytest.raises(ConfigError, match="Available"):
        get_creep_law("nope")


def test_softening_strength_factor() -> None:
    law = SofteningLaw(id=0, aps1=0.1, aps2=0.5, a=0.9)
    assert law.strength_factor(0.0) == pytest.approx(1.0)
    assert law.strength_factor(0.3) == pytest.approx(0.55)
    assert law.strength_factor(2.0) == pytest.approx(0.1)
    assert np.allclose(law.strength_factor(np.array([0.1, 0.5])), [1.0, 0.1])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"aps1": 0.5, "aps2": 0.5, "a": 0.5},
        {"aps1": -0.1, "aps2": 0.5, "a": 0.5},
        {"aps1": 0.1, "aps2": 0.5, "a": 0.0},
        {"aps1": 0.1, "aps2": 0.5, "a": 1.5},
        {"aps1": 0.1, "aps2": 0.5, "a": 0.5, "lm": 0.0},
    ],
)
def test_invalid_softening_laws(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        SofteningLaw(id=0, **kwargs)


def test_invalid_phases() -> None:
    with pytest.raises(ConfigError):
        Phase(id=-1)
    with pytest.raises(ConfigError):
        Phase(id=0, friction=90.0)
    with pytest.raises(ConfigError):
        Phase(id=0, eta=0.0)
