"""Helpers to turn pasted lists and roster CSVs into raw player rows."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from squadsplit.models import DEFAULT_NATIONALITY, DEFAULT_SCORE, new_player_id


logger = logging.getLogger(__name__)

# "12. Name", "7.5 - Name", "3: Name", "10\tName" all lose their rating prefix.
_NUMERIC_PREFIX = re.compile(r"^\s*[0-9]+(?:[.,][0-9]+)?\s*(?:[-,:\t ]+)?\s*")
_LINE_BREAK = re.compile(r"\r?\n")
_LETTER = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ]")

DEFAULT_ROSTER_MAPPING = {
    "player_id": "id",
    "name": "name",
    "score": "score",
    "nationality": "nat",
    "position": "pos",
}


def parse_list_ignore_numbers(text: str) -> List[Dict[str, Any]]:
    """Parse one player per line, dropping numeric prefixes and periods.

    Lines without any letter are skipped. Every player starts with the
    default score and nationality and no position.
    """

    players: List[Dict[str, Any]] = []
    for raw in _LINE_BREAK.split(text or ""):
        line = raw.strip()
        if not line:
            continue
        name = _NUMERIC_PREFIX.sub("", line, count=1).strip()
        name = name.replace(".", "").strip()
        if not name or not _LETTER.search(name):
            continue
        players.append(
            {
                "id": new_player_id(),
                "name": name,
                "score": DEFAULT_SCORE,
                "nationality": DEFAULT_NATIONALITY,
                "position": "",
            }
        )
    return players


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_score: Optional[str] = None
    raw_nationality: Optional[str] = None
    raw_position: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]], *, default: Optional[str] = None) -> Optional[str]:
            if spec is None:
                return default
            if isinstance(spec, str):
                value = (row.get(spec) or "").strip()
                return value or default
            parts = [row.get(col, "").strip() for col in spec if row.get(col)]
            return " ".join(parts) if parts else default

        def parse_spec(key: str) -> Optional[str | Sequence[str]]:
            spec = mapping.get(key)
            if isinstance(spec, str) and "|" in spec:
                return tuple(part.strip() for part in spec.split("|"))
            return spec

        return cls(
            raw_id=extract(parse_spec("player_id")),
            raw_name=extract(parse_spec("name"), default="") or "",
            raw_score=extract(parse_spec("score")),
            raw_nationality=extract(parse_spec("nationality")),
            raw_position=extract(parse_spec("position")),
        )

    def to_player_row(self) -> Dict[str, Any]:
        return {
            "id": self.raw_id or new_player_id(),
            "name": self.raw_name,
            "score": self.raw_score,
            "nationality": self.raw_nationality,
            "position": self.raw_position,
        }


def _required_columns(spec: str) -> List[str]:
    return [part.strip() for part in spec.split("|") if part.strip()]


def rows_to_players(
    rows: Sequence[Mapping[str, str]],
    *,
    mapping: Mapping[str, str] | None = None,
) -> List[Dict[str, Any]]:
    mapping = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    return [RosterRow.from_mapping(row, mapping).to_player_row() for row in rows]


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Dict[str, Any]]:
    """Load a roster CSV using a column mapping.

    Raises ValueError when the file has no header or lacks the name column.
    """

    resolved = {**DEFAULT_ROSTER_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise ValueError(f"roster file {path.name!r} has no header row")
        missing = [
            column for column in _required_columns(resolved["name"]) if column not in reader.fieldnames
        ]
        if missing:
            raise ValueError(
                f"roster file {path.name!r} is missing name column(s): {', '.join(missing)}"
            )
        rows = list(reader)
    players = rows_to_players(rows, mapping=resolved)
    logger.info("Loaded %s roster rows from %s", len(players), path)
    return players


def load_roster(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Dict[str, Any]]:
    """Load ``path`` as CSV when it has a .csv suffix, otherwise as a pasted list."""

    if path.suffix.lower() == ".csv":
        return load_roster_csv(path, mapping=mapping)
    return parse_list_ignore_numbers(path.read_text(encoding="utf-8"))


__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "RosterRow",
    "load_roster",
    "load_roster_csv",
    "parse_list_ignore_numbers",
    "rows_to_players",
]
