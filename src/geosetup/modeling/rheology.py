"""Catalog of named creep laws that phases may reference.

Prefactors ``B`` are in MPa^-n um^m s^-1 as published; the solver converts
them. Only the names travel with a phase, the catalog is used to check them.
"""

from __future__ import annotations

from dataclasses import dataclass

from geosetup.errors import ConfigError


@dataclass(frozen=True)
class CreepLaw:
    name: str
    kind: str
    B: float
    n: float
    E: float  # J/mol
    V: float  # m^3/mol
    m: float = 0.0
    r: float = 0.0

    def __post_init__(self) -> None:
        if self.kind not in {"dislocation", "diffusion"}:
            raise ConfigError(f"Creep law kind must be 'dislocation' or 'diffusion', got '{self.kind}'.")
        if not self.B > 0.0 or not self.n > 0.0:
            raise ConfigError(f"Creep law '{self.name}' needs positive B and n.")


CREEP_LAWS: dict[str, CreepLaw] = {
    law.name: law
    for law in (
        CreepLaw("Dry_Olivine-Hirth_Kohlstedt_2003", "dislocation", B=1.1e5, n=3.5, E=530.0e3, V=15.0e-6),
        CreepLaw("Wet_Olivine-Hirth_Kohlstedt_2003", "dislocation", B=1600.0, n=3.5, E=520.0e3, V=22.0e-6, r=1.2),
        CreepLaw("Wet_Plagioclase-Rybacki_Dresen_2000", "dislocation", B=1.5849, n=3.0, E=345.0e3, V=38.0e-6, r=1.0),
        CreepLaw("Dry_Olivine_diff-Hirth_Kohlstedt_2003", "diffusion", B=1.5e9, n=1.0, E=375.0e3, V=5.0e-6, m=3.0),
        CreepLaw("Wet_Olivine_diff-Hirth_Kohlstedt_2003", "diffusion", B=2.5e7, n=1.0, E=375.0e3, V=10.0e-6, m=3.0, r=0.8),
        CreepLaw("Wet_Plagioclase_diff-Rybacki_Dresen_2000", "diffusion", B=0.1995, n=1.0, E=159.0e3, V=38.0e-6, m=3.0, r=1.0),
    )
}


def get_creep_law(name: str) -> CreepLaw:
    try:
        return CREEP_LAWS[name]
    except KeyError as exc:
        available = ", ".join(sorted(CREEP_LAWS)) or "<none>"
        raise ConfigError(f"Unknown creep law '{name}'. Available creep laws: {available}") from exc


def list_creep_laws(kind: str | None = None) -> tuple[str, ...]:
    return tuple(sorted(name for name, law in CREEP_LAWS.items() if kind is None or law.kind == kind))
