"""Assignment options, weight presets and environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional


logger = logging.getLogger(__name__)

NATIONALITY_WEIGHT_ENV = "SQUADSPLIT_NATIONALITY_WEIGHT"
POSITION_WEIGHT_ENV = "SQUADSPLIT_POSITION_WEIGHT"
SCORE_WEIGHT_ENV = "SQUADSPLIT_SCORE_WEIGHT"


@dataclass(frozen=True)
class WeightPreset:
    name: str
    nationality_weight: float
    position_weight: float
    score_weight: float
    description: str = ""


_PRESETS: Dict[str, WeightPreset] = {
    "balanced": WeightPreset(
        name="balanced",
        nationality_weight=1.0,
        position_weight=2.0,
        score_weight=1.0,
        description="Default mix of nationality, position and score balancing.",
    ),
    "score-first": WeightPreset(
        name="score-first",
        nationality_weight=0.25,
        position_weight=0.5,
        score_weight=3.0,
        description="Even team strength matters most.",
    ),
    "mix-nations": WeightPreset(
        name="mix-nations",
        nationality_weight=3.0,
        position_weight=1.0,
        score_weight=1.0,
        description="Spread nationalities across teams.",
    ),
    "positions-first": WeightPreset(
        name="positions-first",
        nationality_weight=0.5,
        position_weight=4.0,
        score_weight=1.0,
        description="Fill every position quota before anything else.",
    ),
}

# camelCase keys accepted from callers that mirror the browser payloads.
_OPTION_ALIASES: Mapping[str, str] = {
    "numTeams": "num_teams",
    "teamSize": "team_size",
    "sameNatWeight": "nationality_weight",
    "nationalityWeight": "nationality_weight",
    "posWeight": "position_weight",
    "positionWeight": "position_weight",
    "scoreWeight": "score_weight",
}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default


def iter_presets() -> Iterable[WeightPreset]:
    """Return an iterator of all configured weight presets."""

    return _PRESETS.values()


def get_preset(name: str) -> WeightPreset:
    """Fetch a preset by name, raising KeyError if missing."""

    key = name.strip().lower().replace("_", "-")
    if key not in _PRESETS:
        raise KeyError(f"No weight preset named {name!r}")
    return _PRESETS[key]


@dataclass(frozen=True)
class AssignmentOptions:
    """Inputs that shape a single assignment run."""

    num_teams: int = 0
    team_size: int = 0
    seed: str = ""
    nationality_weight: float = 1.0
    position_weight: float = 2.0
    score_weight: float = 1.0

    @property
    def needed(self) -> int:
        return self.num_teams * self.team_size

    def with_preset(self, preset: WeightPreset | str) -> "AssignmentOptions":
        if isinstance(preset, str):
            preset = get_preset(preset)
        return replace(
            self,
            nationality_weight=preset.nationality_weight,
            position_weight=preset.position_weight,
            score_weight=preset.score_weight,
        )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AssignmentOptions":
        """Build options from a loose mapping; absent keys keep their defaults."""

        values: dict[str, Any] = {}
        for key, value in (data or {}).items():
            field_name = _OPTION_ALIASES.get(key, key)
            if field_name in _FIELD_NAMES and value is not None:
                values[field_name] = value
        if "seed" in values:
            values["seed"] = str(values["seed"])
        for key, cast in _NUMERIC_FIELDS.items():
            if key not in values:
                continue
            try:
                values[key] = cast(values[key])
            except (TypeError, ValueError, OverflowError):
                logger.warning("Ignoring non-numeric %s=%r", key, values[key])
                del values[key]
        return cls(**values)

    @classmethod
    def from_env(cls, **overrides: Any) -> "AssignmentOptions":
        """Return options whose weights honour the SQUADSPLIT_* variables."""

        base = cls(
            nationality_weight=_env_float(NATIONALITY_WEIGHT_ENV, cls.nationality_weight),
            position_weight=_env_float(POSITION_WEIGHT_ENV, cls.position_weight),
            score_weight=_env_float(SCORE_WEIGHT_ENV, cls.score_weight),
        )
        return replace(base, **{key: value for key, value in overrides.items() if value is not None})

    def to_dict(self) -> dict[str, Any]:
        return {
            "num_teams": self.num_teams,
            "team_size": self.team_size,
            "seed": self.seed,
            "nationality_weight": self.nationality_weight,
            "position_weight": self.position_weight,
            "score_weight": self.score_weight,
        }


_FIELD_NAMES = frozenset(AssignmentOptions.__dataclass_fields__)

_NUMERIC_FIELDS: Mapping[str, Callable[[Any], Any]] = {
    "num_teams": lambda value: int(float(value)),
    "team_size": lambda value: int(float(value)),
    "nationality_weight": float,
    "position_weight": float,
    "score_weight": float,
}
