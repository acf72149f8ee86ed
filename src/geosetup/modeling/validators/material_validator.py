"""Reference checks run when a material database is assembled."""

from __future__ import annotations

from geosetup.errors import ConfigError
from geosetup.modeling.material_db import MaterialDatabase
from geosetup.modeling.rheology import CREEP_LAWS


def validate_softening_references(materials: MaterialDatabase) -> None:
    for phase in materials.phases:
        for field in ("ch_soft_id", "fr_soft_id"):
            law_id = getattr(phase, field)
            if law_id is not None and not materials.has_softening(law_id):
                raise ConfigError(f"Phase {phase.id} '{phase.name}': {field}={law_id} does not match a softening law.")


def validate_rheology_references(materials: MaterialDatabase) -> None:
    for phase in materials.phases:
        for field, kind in (("dislocation_law", "dislocation"), ("diffusion_law", "diffusion")):
            name = getattr(phase, field)
            if name is None:
                continue
            law = CREEP_LAWS.get(name)
            if law is None:
                raise ConfigError(f"Phase {phase.id} '{phase.name}': unknown creep law '{name}'.")
            if law.kind != kind:
                raise ConfigError(f"Phase {phase.id} '{phase.name}': '{name}' is a {law.kind} law, not a {kind} law.")