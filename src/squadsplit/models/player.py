"""Canonical player model and roster normalization."""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


DEFAULT_SCORE = 5.0
DEFAULT_NATIONALITY = "NA"

_ID_KEYS = ("player_id", "id")
_NATIONALITY_KEYS = ("nationality", "nat")
_POSITION_KEYS = ("position", "pos1")


class PlayerRecord(BaseModel):
    """Normalized player used by the balancer."""

    player_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    score: float = DEFAULT_SCORE
    nationality: str = DEFAULT_NATIONALITY
    position: str = ""

    model_config = ConfigDict(frozen=True)


def new_player_id() -> str:
    """Return a fresh opaque player identifier."""

    return uuid4().hex[:12]


def coerce_score(value: Any) -> float:
    """Return ``value`` as a finite float, or the default score.

    Blank text counts as zero and booleans as 0 or 1, matching how the
    browser client submits a cleared or toggled score field. ``None``,
    unparseable text, NaN and infinities fall back to the default.
    """

    if value is None:
        return DEFAULT_SCORE
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SCORE
    if not math.isfinite(score):
        return DEFAULT_SCORE
    return score


def _lookup(row: Any, keys: Iterable[str], *, skip_blank: bool = True) -> Optional[Any]:
    """Return the first value under ``keys`` that is neither None nor blank text."""

    for key in keys:
        if isinstance(row, Mapping):
            value = row.get(key)
        else:
            value = getattr(row, key, None)
        if value is None or (skip_blank and isinstance(value, str) and not value.strip()):
            continue
        return value
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_players(rows: Optional[Iterable[Any]]) -> List[PlayerRecord]:
    """Sanitize raw player rows, dropping entries without a name.

    Rows may be mappings or objects exposing the same attribute names. Order
    is preserved and duplicate names are kept.
    """

    players: List[PlayerRecord] = []
    for row in rows or ():
        if row is None:
            continue
        name = _text(_lookup(row, ("name",)))
        if not name:
            continue
        player_id = _text(_lookup(row, _ID_KEYS)) or new_player_id()
        nationality = _text(_lookup(row, _NATIONALITY_KEYS)) or DEFAULT_NATIONALITY
        players.append(
            PlayerRecord(
                player_id=player_id,
                name=name,
                score=coerce_score(_lookup(row, ("score",), skip_blank=False)),
                nationality=nationality,
                position=_text(_lookup(row, _POSITION_KEYS)),
            )
        )
    return players
