"""Input adapters that turn pasted text and CSV files into raw player rows."""

from squadsplit.models import new_player_id

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    RosterRow,
    load_roster,
    load_roster_csv,
    parse_list_ignore_numbers,
    rows_to_players,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "RosterRow",
    "load_roster",
    "load_roster_csv",
    "new_player_id",
    "parse_list_ignore_numbers",
    "rows_to_players",
]
