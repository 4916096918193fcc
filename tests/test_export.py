import csv
from io import StringIO

import pytest

from squadsplit.balancer import compute_assignments
from squadsplit.config import AssignmentOptions
from squadsplit.export import (
    AssignmentExportError,
    CSV_HEADERS,
    build_clipboard_teams,
    export_assignments_to_csv,
)
from squadsplit.models import PlayerRecord


def test_clipboard_with_positions():
    text = build_clipboard_teams(
        [
            {"name": "Team 1", "members": [{"name": "A", "position": "D"}, {"name": "B", "position": "M"}]},
            {"name": "Team 2", "members": [{"name": "C", "pos1": "F"}]},
        ]
    )

    assert text == "Team 1\nName,Pos\nA,D\nB,M\n\nTeam 2\nName,Pos\nC,F\n"


def test_clipboard_without_positions():
    text = build_clipboard_teams([{"name": "Team 3", "members": [{"name": "X", "position": ""}, {"name": "Y"}]}])

    assert text == "Team 3\nName\nX\nY\n"


def test_clipboard_mixed_positions_and_default_label():
    text = build_clipboard_teams([{"name": "", "members": [{"name": "A", "position": " MF "}, {"name": "B"}]}])

    assert text.splitlines() == ["Team 1", "Name,Pos", "A,MF", "B"]


def test_clipboard_empty():
    assert build_clipboard_teams([]) == ""
    assert build_clipboard_teams(None) == ""


def test_clipboard_from_result_teams():
    players = [
        PlayerRecord(player_id=f"p{i}", name=f"P{i}", score=float(i), position="GK" if i % 2 else "")
        for i in range(4)
    ]
    result = compute_assignments(players, AssignmentOptions(num_teams=2, team_size=2))

    text = build_clipboard_teams(result.teams)

    assert text.startswith("Team 1\nName,Pos\n")
    assert "Team 2\n" in text
    for player in players:
        assert player.name in text


def test_export_assignments_to_csv_lists_main_then_subs():
    players = [
        PlayerRecord(player_id="a", name="Ana", score=9, nationality="ES", position="MF"),
        PlayerRecord(player_id="b", name="Ben", score=1, nationality="BR", position="DF"),
        PlayerRecord(player_id="c", name="Cy", score=0.5),
    ]
    result = compute_assignments(players, AssignmentOptions(num_teams=2, team_size=1))

    rows = list(csv.reader(StringIO(export_assignments_to_csv(result))))

    assert tuple(rows[0]) == CSV_HEADERS
    assert rows[1] == ["Team 1", "main", "a", "Ana", "9.0", "ES", "MF"]
    assert rows[2] == ["Team 2", "main", "b", "Ben", "1.0", "BR", "DF"]
    assert rows[3] == ["Team 2", "sub", "c", "Cy", "0.5", "NA", ""]


def test_export_rejects_failed_result():
    result = compute_assignments([], AssignmentOptions())

    with pytest.raises(AssignmentExportError):
        export_assignments_to_csv(result)
