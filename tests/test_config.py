import json

import pytest

from race_strategy.config import (
    default_setup, load_setup, parse_strategy, save_setup, setup_from_dict, setup_to_dict,
)
from race_strategy.errors import InvalidConfig, InvalidStrategy
from race_strategy.models import Compound


def test_parse_strategy_default_name():
    p = parse_strategy("Soft:18,Medium:30,Hard:30")
    assert p.name == "S-M-H"
    assert [(s.compound, s.laps) for s in p.stints] == [(Compound.SOFT, 18), (Compound.MEDIUM, 30), (Compound.HARD, 30)]


def test_parse_strategy_named_short_codes():
    p = parse_strategy("one-stop=m:39, h:39")
    assert p.name == "one-stop"
    assert p.total_planned_laps == 78


@pytest.mark.parametrize("text", ["Soft-18", "Soft:x", "Wet:10", "Soft:10:2"])
def test_parse_strategy_bad_stint(text):
    with pytest.raises(InvalidConfig):
        parse_strategy(text)


def test_parse_strategy_zero_laps():
    with pytest.raises(InvalidStrategy):
        parse_strategy("Soft:0,Hard:78")


def test_setup_round_trip_through_json(tmp_path):
    path = tmp_path / "race.json"
    save_setup(default_setup(), str(path))
    loaded = load_setup(str(path))
    assert loaded == default_setup()
    raw = json.loads(path.read_text())
    assert raw["tyres"][0]["compound"] == "Soft"
    assert raw["strategies"][1]["stints"][0] == ["Medium", 25]


def test_setup_defaults_optional_fields():
    s = setup_from_dict({
        "race": {"total_laps": 50},
        "tyres": [{"compound": "hard", "base_lap_seconds": 90.0}],
    })
    assert s.config.pit_loss_seconds == 0.0
    assert s.tyres[0].compound is Compound.HARD
    assert s.tyres[0].cliff_start_lap is None
    assert s.strategies == ()


@pytest.mark.parametrize("obj", [
    {"tyres": []},
    {"race": {"pit_loss_seconds": 20}, "tyres": []},
    {"race": {"total_laps": 50}, "tyres": [{"compound": "Ultra", "base_lap_seconds": 1.0}]},
    {"race": {"total_laps": 50}, "tyres": [], "strategies": [{"name": "x", "stints": [["Soft"]]}]},
    # numbers given as strings
    {"race": {"total_laps": 50}, "tyres": [{"compound": "S", "base_lap_seconds": "80"}]},
    {"race": {"total_laps": 50}, "tyres": [{"compound": "S", "base_lap_seconds": 80, "linear_deg_seconds_per_lap": "0.1"}]},
    {"race": {"total_laps": 50}, "tyres": [{"compound": "S", "base_lap_seconds": 80, "cliff_extra_seconds_per_lap": None}]},
    # collections that are not lists
    {"race": {"total_laps": 2}, "tyres": 5},
    {"race": {"total_laps": 2}, "tyres": {"compound": "S"}},
    {"race": {"total_laps": 2}, "tyres": [], "strategies": {"name": "x"}},
    {"race": {"total_laps": 2}, "tyres": [], "strategies": [{"name": "x", "stints": "S:2"}]},
    {"race": {"total_laps": 2}, "tyres": [5]},
])
def test_setup_from_dict_rejects_malformed(obj):
    with pytest.raises(InvalidConfig):
        setup_from_dict(obj)


def test_load_setup_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(InvalidConfig):
        load_setup(str(path))


def test_setup_to_dict_keeps_cliff_none():
    d = setup_to_dict(setup_from_dict({"race": {"total_laps": 5}, "tyres": [{"compound": "S", "base_lap_seconds": 70}]}))
    assert d["tyres"][0]["cliff_start_lap"] is None
