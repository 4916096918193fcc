import math

import pytest
from pydantic import ValidationError

from squadsplit.models import PlayerRecord, coerce_score, normalize_players


def test_player_record_is_frozen():
    record = PlayerRecord(player_id="p1", name="Ana", score=7.0, nationality="ES", position="MF")

    assert record.player_id == "p1"
    assert record.nationality == "ES"

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[misc]


def test_player_record_defaults():
    record = PlayerRecord(player_id="p1", name="Ana")
    assert record.score == 5.0
    assert record.nationality == "NA"
    assert record.position == ""


def test_normalize_trims_and_defaults():
    rows = [
        {"id": "a", "name": "  Ana  ", "score": "7", "nat": " ", "pos1": " MF "},
        {"id": "b", "name": "Ben", "score": 3, "nationality": "BR", "position": "DF"},
    ]

    players = normalize_players(rows)

    assert [player.player_id for player in players] == ["a", "b"]
    assert players[0].name == "Ana"
    assert players[0].score == 7.0
    assert players[0].nationality == "NA"
    assert players[0].position == "MF"
    assert players[1].nationality == "BR"
    assert players[1].position == "DF"


def test_normalize_drops_unnamed_and_keeps_duplicates():
    rows = [
        {"id": "a", "name": "Ana"},
        {"id": "b", "name": "   "},
        {"id": "c"},
        None,
        {"id": "d", "name": "Ana"},
    ]

    players = normalize_players(rows)

    assert [player.player_id for player in players] == ["a", "d"]


def test_normalize_generates_missing_ids():
    players = normalize_players([{"name": "Ana"}, {"name": "Ben", "id": ""}])

    assert all(player.player_id for player in players)
    assert players[0].player_id != players[1].player_id


def test_normalize_accepts_records():
    record = PlayerRecord(player_id="p1", name="Ana", score=9.0, nationality="ES", position="FW")

    assert normalize_players([record]) == [record]


def test_normalize_none_is_empty():
    assert normalize_players(None) == []


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 5.0),
        ("", 0.0),
        ("  ", 0.0),
        ("abc", 5.0),
        (True, 1.0),
        (False, 0.0),
        ("inf", 5.0),
        (10**400, 5.0),
        (float("nan"), 5.0),
        (math.inf, 5.0),
        ("7.5", 7.5),
        (0, 0.0),
        (-2, -2.0),
    ],
)
def test_coerce_score(raw, expected):
    assert coerce_score(raw) == expected


def test_normalize_scores_cleared_and_toggled_fields():
    players = normalize_players(
        [
            {"name": "a", "score": ""},
            {"name": "b", "score": None},
            {"name": "c", "score": True},
            {"name": "d"},
        ]
    )

    assert [player.score for player in players] == [0.0, 5.0, 1.0, 5.0]


def test_normalize_blank_field_falls_back_to_alias():
    players = normalize_players(
        [
            {"name": "Ana", "nationality": "", "nat": "ES", "position": " ", "pos1": "MF"},
            {"name": "Ben", "player_id": "", "id": "b7"},
        ]
    )

    assert players[0].nationality == "ES"
    assert players[0].position == "MF"
    assert players[1].player_id == "b7"
