from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidConfig
from .models import Compound, RaceConfig, StintPlan, StrategyPlan, TyreModel


# Everything needed to simulate one race: constants, tyre models and (optionally) strategies to try
@dataclass(frozen=True)
class RaceSetup:
    config: RaceConfig
    tyres: Tuple[TyreModel, ...]
    strategies: Tuple[StrategyPlan, ...] = ()


def default_setup() -> RaceSetup:
    cfg = RaceConfig(
        total_laps=78,
        pit_loss_seconds=21.5,
        fuel_effect_per_lap_seconds=0.03,  # laps get ~0.03s quicker each lap
        traffic_penalty_seconds=0.0,
    )
    tyres = (
        TyreModel(Compound.SOFT, base_lap_seconds=74.8, linear_deg_seconds_per_lap=0.060,
                  quadratic_deg_seconds_per_lap2=0.0006, cliff_start_lap=18, cliff_extra_seconds_per_lap=0.08),
        TyreModel(Compound.MEDIUM, base_lap_seconds=75.5, linear_deg_seconds_per_lap=0.040,
                  quadratic_deg_seconds_per_lap2=0.0004, cliff_start_lap=28, cliff_extra_seconds_per_lap=0.05),
        TyreModel(Compound.HARD, base_lap_seconds=76.2, linear_deg_seconds_per_lap=0.030,
                  quadratic_deg_seconds_per_lap2=0.0003, cliff_start_lap=40, cliff_extra_seconds_per_lap=0.03),
    )
    strategies = (
        StrategyPlan("S-M-H", [StintPlan(Compound.SOFT, 18), StintPlan(Compound.MEDIUM, 30), StintPlan(Compound.HARD, 30)]),
        StrategyPlan("M-H-H", [StintPlan(Compound.MEDIUM, 25), StintPlan(Compound.HARD, 27), StintPlan(Compound.HARD, 26)]),
    )
    return RaceSetup(cfg, tyres, strategies)


def parse_strategy(text: str, name: Optional[str] = None) -> StrategyPlan:
    """
    "Soft:18,Medium:30,Hard:30" or "NAME=S:18,M:30,H:30".
    Without a name the plan is called after its compounds, e.g. "S-M-H".
    """
    body = text
    if "=" in text:
        prefix, body = text.split("=", 1)
        name = name or prefix.strip()
    stints = []
    for chunk in body.split(","):
        if not chunk.strip():
            continue
        try:
            comp, laps = chunk.split(":")
            stints.append(StintPlan(Compound.parse(comp), int(laps)))
        except ValueError as e:
            raise InvalidConfig(f"Bad stint {chunk.strip()!r} in strategy {text!r}: expected COMPOUND:LAPS") from e
    if not name:
        name = "-".join(s.compound.letter for s in stints)
    return StrategyPlan(name, stints)


# ---------- dict <-> setup ----------

def _require(obj: Dict[str, Any], key: str, where: str) -> Any:
    if not isinstance(obj, dict) or key not in obj:
        raise InvalidConfig(f"Missing '{key}' in {where}.")
    return obj[key]


def _require_list(obj: Dict[str, Any], key: str, where: str, optional: bool = False) -> List[Any]:
    if optional and isinstance(obj, dict) and key not in obj:
        return []
    value = _require(obj, key, where)
    if not isinstance(value, list):
        raise InvalidConfig(f"'{key}' in {where} must be a list, got {value!r}.")
    return value


def _compound(value: Any) -> Compound:
    try:
        return Compound.parse(value)
    except ValueError as e:
        raise InvalidConfig(str(e)) from e


def _race_from_dict(raw: Dict[str, Any]) -> RaceConfig:
    return RaceConfig(
        total_laps=_require(raw, "total_laps", "race"),
        pit_loss_seconds=raw.get("pit_loss_seconds", 0.0),
        fuel_effect_per_lap_seconds=raw.get("fuel_effect_per_lap_seconds", 0.0),
        traffic_penalty_seconds=raw.get("traffic_penalty_seconds", 0.0),
    )


def _tyre_from_dict(raw: Dict[str, Any]) -> TyreModel:
    return TyreModel(
        compound=_compound(_require(raw, "compound", "tyre")),
        base_lap_seconds=_require(raw, "base_lap_seconds", "tyre"),
        linear_deg_seconds_per_lap=raw.get("linear_deg_seconds_per_lap", 0.0),
        quadratic_deg_seconds_per_lap2=raw.get("quadratic_deg_seconds_per_lap2", 0.0),
        cliff_start_lap=raw.get("cliff_start_lap"),
        cliff_extra_seconds_per_lap=raw.get("cliff_extra_seconds_per_lap", 0.0),
    )


def _strategy_from_dict(raw: Dict[str, Any]) -> StrategyPlan:
    stints = []
    for st in _require_list(raw, "stints", "strategy"):
        if not isinstance(st, (list, tuple)) or len(st) != 2:
            raise InvalidConfig(f"Stint must be [compound, laps], got {st!r}.")
        stints.append(StintPlan(_compound(st[0]), st[1]))
    return StrategyPlan(_require(raw, "name", "strategy"), stints)


def setup_from_dict(obj: Dict[str, Any]) -> RaceSetup:
    cfg = _race_from_dict(_require(obj, "race", "setup"))
    tyres = tuple(_tyre_from_dict(t) for t in _require_list(obj, "tyres", "setup"))
    strategies = tuple(_strategy_from_dict(s) for s in _require_list(obj, "strategies", "setup", optional=True))
    return RaceSetup(cfg, tyres, strategies)


def setup_to_dict(setup: RaceSetup) -> Dict[str, Any]:
    cfg = setup.config
    return {
        "race": {
            "total_laps": cfg.total_laps,
            "pit_loss_seconds": cfg.pit_loss_seconds,
            "fuel_effect_per_lap_seconds": cfg.fuel_effect_per_lap_seconds,
            "traffic_penalty_seconds": cfg.traffic_penalty_seconds,
        },
        "tyres": [
            {
                "compound": t.compound.value,
                "base_lap_seconds": t.base_lap_seconds,
                "linear_deg_seconds_per_lap": t.linear_deg_seconds_per_lap,
                "quadratic_deg_seconds_per_lap2": t.quadratic_deg_seconds_per_lap2,
                "cliff_start_lap": t.cliff_start_lap,
                "cliff_extra_seconds_per_lap": t.cliff_extra_seconds_per_lap,
            }
            for t in setup.tyres
        ],
        "strategies": [
            {"name": s.name, "stints": [[st.compound.value, st.laps] for st in s.stints]}
            for s in setup.strategies
        ],
    }


def save_setup(setup: RaceSetup, path: str):
    with open(path, "w") as f:
        json.dump(setup_to_dict(setup), f, indent=2)


def load_setup(path: str) -> RaceSetup:
    with open(path, "r") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfig(f"{path} is not valid JSON: {e}") from e
    return setup_from_dict(raw)
