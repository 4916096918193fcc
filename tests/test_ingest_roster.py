from pathlib import Path

import pytest

from squadsplit.ingest import load_roster, load_roster_csv, parse_list_ignore_numbers, rows_to_players
from squadsplit.models import normalize_players


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_parse_list_removes_numeric_prefixes():
    text = "12. Luis Miguel\n7.5 - Jane Smith.\n  33 Carlos\n\n-- invalid"

    players = parse_list_ignore_numbers(text)

    assert [player["name"] for player in players][:3] == ["Luis Miguel", "Jane Smith", "Carlos"]
    assert len(players) >= 3


def test_parse_list_skips_lines_without_letters():
    players = parse_list_ignore_numbers("...\n42\n 7,5 : \n3: José Ñúñez\r\n8\tÅsa")

    assert [player["name"] for player in players] == ["José Ñúñez", "Åsa"]


def test_parse_list_defaults():
    players = parse_list_ignore_numbers("1 - Ana\n2 - Ben")

    assert {player["score"] for player in players} == {5.0}
    assert {player["nationality"] for player in players} == {"NA"}
    assert {player["position"] for player in players} == {""}
    assert len({player["id"] for player in players}) == 2


def test_parse_list_empty_text():
    assert parse_list_ignore_numbers("") == []


def test_parse_list_splits_only_on_newlines():
    players = parse_list_ignore_numbers("1. Ana\x0bBen\r\n2. Carla\u2028Dora\n3. Eva")

    assert [player["name"] for player in players] == ["Ana\x0bBen", "Carla\u2028Dora", "Eva"]


def test_parse_list_strips_ascii_digits_only():
    players = parse_list_ignore_numbers("\u0663 Ana\n12 Ben")

    assert [player["name"] for player in players] == ["\u0663 Ana", "Ben"]


def test_load_roster_csv_default_mapping(tmp_path):
    path = _write(
        tmp_path,
        "roster.csv",
        "id,name,score,nat,pos\n1,Ana,7,ES,MF\n2,Ben,,BR,\n3,,4,US,GK\n",
    )

    players = normalize_players(load_roster_csv(path))

    assert [player.player_id for player in players] == ["1", "2"]
    assert players[0].score == 7.0
    assert players[0].position == "MF"
    assert players[1].score == 5.0
    assert players[1].position == ""


def test_load_roster_csv_custom_mapping_joins_columns(tmp_path):
    path = _write(
        tmp_path,
        "roster.csv",
        "First,Last,Rating,Country\nAna,Lopez,8,ES\nBen,Silva,6,\n",
    )

    rows = load_roster_csv(
        path,
        mapping={"name": "First|Last", "score": "Rating", "nationality": "Country"},
    )
    players = normalize_players(rows)

    assert [player.name for player in players] == ["Ana Lopez", "Ben Silva"]
    assert [player.nationality for player in players] == ["ES", "NA"]
    assert all(player.player_id for player in players)


def test_load_roster_csv_missing_name_column(tmp_path):
    path = _write(tmp_path, "roster.csv", "player,score\nAna,7\n")

    with pytest.raises(ValueError, match="missing name column"):
        load_roster_csv(path)


def test_load_roster_csv_empty_file(tmp_path):
    path = _write(tmp_path, "roster.csv", "")

    with pytest.raises(ValueError, match="no header"):
        load_roster_csv(path)


def test_load_roster_dispatches_on_suffix(tmp_path):
    text_path = _write(tmp_path, "roster.txt", "1. Ana\n2. Ben\n")
    csv_path = _write(tmp_path, "roster.csv", "name\nCarla\n")

    assert [row["name"] for row in load_roster(text_path)] == ["Ana", "Ben"]
    assert [row["name"] for row in load_roster(csv_path)] == ["Carla"]


def test_rows_to_players_keeps_raw_values():
    rows = rows_to_players([{"id": "9", "name": "Ana", "score": "x", "nat": "", "pos": "DF"}])

    assert rows == [{"id": "9", "name": "Ana", "score": "x", "nationality": None, "position": "DF"}]
