import logging
import json

import pytest

from squadsplit.config import AssignmentOptions, get_preset, iter_presets
from squadsplit.config_loader import OptionsProfile


def test_get_preset_normalizes_name():
    preset = get_preset("Score_First")
    assert preset.name == "score-first"
    assert preset.score_weight == 3.0


def test_get_preset_missing_raises():
    with pytest.raises(KeyError):
        get_preset("chaos")


def test_balanced_preset_matches_defaults():
    balanced = get_preset("balanced")
    defaults = AssignmentOptions()
    assert (balanced.nationality_weight, balanced.position_weight, balanced.score_weight) == (
        defaults.nationality_weight,
        defaults.position_weight,
        defaults.score_weight,
    )
    assert {preset.name for preset in iter_presets()} >= {"balanced", "mix-nations"}


def test_from_mapping_accepts_aliases_and_defaults():
    options = AssignmentOptions.from_mapping(
        {"numTeams": "3", "teamSize": 4, "sameNatWeight": 2, "posWeight": None, "unknown": 1}
    )

    assert options.num_teams == 3
    assert options.team_size == 4
    assert options.nationality_weight == 2.0
    assert options.position_weight == 2.0
    assert options.score_weight == 1.0
    assert options.seed == ""
    assert options.needed == 12


def test_from_mapping_ignores_non_numeric(caplog):
    with caplog.at_level(logging.WARNING):
        options = AssignmentOptions.from_mapping({"num_teams": "many", "team_size": 2})

    assert options.num_teams == 0
    assert options.team_size == 2
    assert "num_teams" in caplog.text


@pytest.mark.parametrize("raw", [float("inf"), "inf", "-inf", float("nan")])
def test_from_mapping_ignores_unbounded_counts(raw, caplog):
    with caplog.at_level(logging.WARNING):
        options = AssignmentOptions.from_mapping({"numTeams": raw, "teamSize": 1})

    assert options.num_teams == 0
    assert options.team_size == 1
    assert "num_teams" in caplog.text


def test_from_env_reads_weight_overrides(monkeypatch):
    monkeypatch.setenv("SQUADSPLIT_NATIONALITY_WEIGHT", "0.5")
    monkeypatch.setenv("SQUADSPLIT_SCORE_WEIGHT", "oops")

    options = AssignmentOptions.from_env(num_teams=2, team_size=3, seed=None)

    assert options.nationality_weight == 0.5
    assert options.score_weight == 1.0
    assert options.num_teams == 2
    assert options.seed == ""


def test_with_preset_replaces_weights_only():
    options = AssignmentOptions(num_teams=2, team_size=5, seed="abc").with_preset("mix-nations")

    assert options.num_teams == 2
    assert options.seed == "abc"
    assert options.nationality_weight == 3.0


def test_options_profile_round_trip(tmp_path):
    path = tmp_path / "profile.json"
    profile = OptionsProfile(
        options=AssignmentOptions(num_teams=3, team_size=4, seed="demo", position_weight=1.5),
        roster_mapping={"name": "Player"},
        preset="balanced",
    )

    profile.save(path)
    loaded = OptionsProfile.load(path)

    assert loaded.options == profile.options
    assert loaded.roster_mapping == {"name": "Player"}
    assert json.loads(path.read_text(encoding="utf-8"))["preset"] == "balanced"
