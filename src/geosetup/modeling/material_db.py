"""Material database keyed by phase and softening-law IDs."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterator, Mapping

from geosetup.errors import ConfigError
from geosetup.modeling.schema import Phase, SofteningLaw


logger = logging.getLogger(__name__)


class MaterialDatabase:
    """Append-only catalog of phases and softening laws.

    Softening and creep-law references are not resolved on registration, so
    phases may reference laws registered later; ``assemble`` checks them.
    """

    def __init__(self) -> None:
        self._phases: dict[int, Phase] = {}
        self._softening: dict[int, SofteningLaw] = {}

    def register(self, phase: Phase) -> Phase:
        if not isinstance(phase, Phase):
            raise ConfigError("register expects a Phase.")
        if phase.id in self._phases:
            raise ConfigError(f"Phase id {phase.id} is already registered ('{self._phases[phase.id].name}').")
        self._phases[phase.id] = phase
        logger.debug(f"Registered phase {phase.id} '{phase.name}'.")
        return phase

    def derive(self, base: Phase | int, overrides: Mapping[str, Any], new_id: int) -> Phase:
        """Clone ``base``, apply ``overrides``, assign ``new_id`` and register it."""

        if not isinstance(base, Phase):
            base = self.phase(base)
        if new_id == base.id:
            raise ConfigError(f"Derived phase must not reuse the base phase id {base.id}.")
        if new_id in self._phases:
            raise ConfigError(f"Phase id {new_id} is already registered ('{self._phases[new_id].name}').")
        overrides = dict(overrides)
        if "id" in overrides:
            raise ConfigError("Pass the new phase id as new_id, not as an override.")
        known = {f.name for f in dataclasses.fields(Phase)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown phase fields in overrides: {', '.join(unknown)}.")
        return self.register(dataclasses.replace(base, id=int(new_id), **overrides))

    def register_softening(self, law: SofteningLaw) -> SofteningLaw:
        if not isinstance(law, SofteningLaw):
            raise ConfigError("register_softening expects a SofteningLaw.")
        if law.id in self._softening:
            raise ConfigError(f"Softening law id {law.id} is already registered.")
        self._softening[law.id] = law
        return law

    def phase(self, phase_id: int) -> Phase:
        try:
            return self._phases[phase_id]
        except KeyError as exc:
            raise ConfigError(f"Unknown phase id {phase_id}.") from exc

    def softening(self, law_id: int) -> SofteningLaw:
        try:
            return self._softening[law_id]
        except KeyError as exc:
            raise ConfigError(f"Unknown softening law id {law_id}.") from exc

    @property
    def phases(self) -> tuple[Phase, ...]:
        return tuple(self._phases[i] for i in sorted(self._phases))

    @property
    def softening_laws(self) -> tuple[SofteningLaw, ...]:
        return tuple(self._softening[i] for i in sorted(self._softening))

    @property
    def phase_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._phases))

    def has_softening(self, law_id: int) -> bool:
        return law_id in self._softening

    def __contains__(self, phase_id: object) -> bool:
        return phase_id in self._phases

    def __len__(self) -> int:
        return len(self._phases)

    def __iter__(self) -> Iterator[Phase]:
        return iter(self.phases)
