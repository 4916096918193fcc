"""Persist and load CLI option profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from squadsplit.config import AssignmentOptions


@dataclass
class OptionsProfile:
    options: AssignmentOptions
    roster_mapping: dict[str, str]
    preset: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "OptionsProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            options=AssignmentOptions.from_mapping(data.get("options", {})),
            roster_mapping=data.get("roster_mapping", {}),
            preset=data.get("preset"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "options": self.options.to_dict(),
            "roster_mapping": self.roster_mapping,
            "preset": self.preset,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
