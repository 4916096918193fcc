"""Player models shared across ingestion, balancing and export layers."""

from .player import (
    DEFAULT_NATIONALITY,
    DEFAULT_SCORE,
    PlayerRecord,
    coerce_score,
    new_player_id,
    normalize_players,
)

__all__ = [
    "DEFAULT_NATIONALITY",
    "DEFAULT_SCORE",
    "PlayerRecord",
    "coerce_score",
    "new_player_id",
    "normalize_players",
]
