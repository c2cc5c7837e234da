import pytest

from race_strategy.errors import InvalidConfig, InvalidStrategy
from race_strategy.models import Compound, RaceConfig, StintPlan, StrategyPlan, TyreModel
from race_strategy.simulator import RaceSimulator


def test_compound_parse_spellings():
    assert Compound.parse("soft") is Compound.SOFT
    assert Compound.parse("MEDIUM") is Compound.MEDIUM
    assert Compound.parse("h") is Compound.HARD
    assert Compound.parse(Compound.HARD) is Compound.HARD
    assert str(Compound.SOFT) == "Soft"
    with pytest.raises(ValueError):
        Compound.parse("intermediate")


def test_strategy_derived_values():
    plan = StrategyPlan("M-H", [StintPlan(Compound.MEDIUM, 20), StintPlan(Compound.HARD, 38)])
    assert plan.total_planned_laps == 58
    assert plan.pit_stops == 1
    assert isinstance(plan.stints, tuple)


def test_strategy_stints_are_copied():
    stints = [StintPlan(Compound.SOFT, 10)]
    plan = StrategyPlan("S", stints)
    stints.append(StintPlan(Compound.HARD, 10))
    assert plan.total_planned_laps == 10


def test_empty_strategy_rejected():
    with pytest.raises(InvalidStrategy):
        StrategyPlan("empty", [])


@pytest.mark.parametrize("laps", [0, -3, 2.5])
def test_non_positive_stint_rejected(laps):
    with pytest.raises(InvalidStrategy):
        StrategyPlan("bad", [StintPlan(Compound.SOFT, 10), StintPlan(Compound.HARD, laps)])


@pytest.mark.parametrize("kwargs", [
    {"total_laps": 0},
    {"total_laps": 10.0},
    {"total_laps": 10, "pit_loss_seconds": -1.0},
    {"total_laps": 10, "traffic_penalty_seconds": -0.1},
])
def test_race_config_rejects_bad_values(kwargs):
    with pytest.raises(InvalidConfig):
        RaceConfig(**kwargs)


def test_race_config_allows_negative_fuel_effect():
    assert RaceConfig(total_laps=5, fuel_effect_per_lap_seconds=-0.01).fuel_effect_per_lap_seconds == -0.01


def test_tyre_model_rejects_bad_cliff():
    with pytest.raises(InvalidConfig):
        TyreModel(Compound.SOFT, 74.0, cliff_start_lap=0)
    with pytest.raises(InvalidConfig):
        TyreModel("Soft", 74.0)


def test_models_are_immutable():
    cfg = RaceConfig(total_laps=10)
    with pytest.raises(AttributeError):
        cfg.total_laps = 11


def test_stint_compound_given_as_text_is_parsed():
    plan = StrategyPlan("S-H", [StintPlan("Soft", 10), StintPlan("h", 5)])
    assert [s.compound for s in plan.stints] == [Compound.SOFT, Compound.HARD]
    assert StintPlan("Soft", 10) == StintPlan(Compound.SOFT, 10)


def test_stint_text_compound_finds_registered_model():
    cfg = RaceConfig(total_laps=10)
    sim = RaceSimulator(cfg, [TyreModel(Compound.SOFT, 80.0)])
    res = sim.run(StrategyPlan("S", [StintPlan("Soft", 10)]))
    assert res.laps[0].compound is Compound.SOFT
    assert res.total_race_seconds == pytest.approx(800.0)


def test_stint_unknown_compound_rejected():
    with pytest.raises(InvalidStrategy):
        StintPlan("Wet", 10)


@pytest.mark.parametrize("field", [
    "base_lap_seconds", "linear_deg_seconds_per_lap", "quadratic_deg_seconds_per_lap2", "cliff_extra_seconds_per_lap",
])
def test_tyre_model_rejects_non_numeric_coefficients(field):
    kwargs = {"base_lap_seconds": 74.0, field: "0.5"}
    with pytest.raises(InvalidConfig):
        TyreModel(Compound.SOFT, **kwargs)
