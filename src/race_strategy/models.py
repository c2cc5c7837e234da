from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real
from typing import Iterable, Optional, Tuple

import numpy as np
import pandas as pd

from .errors import InvalidConfig, InvalidStrategy


# Tyre rubber types. Closed set, one tyre model per member.
class Compound(str, Enum):
    SOFT = "Soft"
    MEDIUM = "Medium"
    HARD = "Hard"

    def __str__(self) -> str:
        return self.value

    @property
    def letter(self) -> str:
        return self.value[0]

    @classmethod
    def parse(cls, text) -> "Compound":
        """Accept 'Soft', 'SOFT', 'soft' or 'S' (and an existing member)."""
        if isinstance(text, cls):
            return text
        key = str(text).strip().upper()
        for member in cls:
            if key in (member.name, member.letter):
                return member
        raise ValueError(f"Unknown compound: {text!r}")


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


# Race-wide constants, fixed for the lifetime of a simulation run
@dataclass(frozen=True)
class RaceConfig:
    total_laps: int  # Race distance in laps
    pit_loss_seconds: float = 0.0  # Time lost for one pit stop under green
    fuel_effect_per_lap_seconds: float = 0.0  # Each race lap after the first is this much quicker (fuel burn-off)
    traffic_penalty_seconds: float = 0.0  # Constant added to every lap

    def __post_init__(self) -> None:
        if not _is_int(self.total_laps) or self.total_laps <= 0:
            raise InvalidConfig(f"total_laps must be a positive integer, got {self.total_laps!r}.")
        for field_name in ("pit_loss_seconds", "fuel_effect_per_lap_seconds", "traffic_penalty_seconds"):
            if not isinstance(getattr(self, field_name), Real):
                raise InvalidConfig(f"{field_name} must be a number, got {getattr(self, field_name)!r}.")
        if self.pit_loss_seconds < 0:
            raise InvalidConfig(f"pit_loss_seconds cannot be negative, got {self.pit_loss_seconds}.")
        if self.traffic_penalty_seconds < 0:
            raise InvalidConfig(f"traffic_penalty_seconds cannot be negative, got {self.traffic_penalty_seconds}.")


# Degradation profile of one compound
@dataclass(frozen=True)
class TyreModel:
    compound: Compound
    base_lap_seconds: float  # Lap time on fresh tyres at the start of the race
    linear_deg_seconds_per_lap: float = 0.0  # s added per stint lap
    quadratic_deg_seconds_per_lap2: float = 0.0  # s added per stint lap squared
    cliff_start_lap: Optional[int] = None  # Stint lap where the cliff kicks in (None = no cliff)
    cliff_extra_seconds_per_lap: float = 0.0  # s added per lap at or past the cliff

    def __post_init__(self) -> None:
        if not isinstance(self.compound, Compound):
            raise InvalidConfig(f"compound must be a Compound, got {self.compound!r}.")
        for field_name in ("base_lap_seconds", "linear_deg_seconds_per_lap",
                           "quadratic_deg_seconds_per_lap2", "cliff_extra_seconds_per_lap"):
            if not isinstance(getattr(self, field_name), Real):
                raise InvalidConfig(f"{field_name} must be a number, got {getattr(self, field_name)!r}.")
        if self.cliff_start_lap is not None and (not _is_int(self.cliff_start_lap) or self.cliff_start_lap <= 0):
            raise InvalidConfig(f"cliff_start_lap must be a positive integer or None, got {self.cliff_start_lap!r}.")

    def lap_time_seconds(self, race_lap: int, stint_lap: int, cfg: RaceConfig) -> float:
        """
        Time for one lap. `race_lap` is the 1-based lap of the race, `stint_lap`
        the 1-based lap on this set of tyres. Not clamped at zero.
        """
        t = self.base_lap_seconds

        # Degradation within the stint
        t += self.linear_deg_seconds_per_lap * stint_lap
        t += self.quadratic_deg_seconds_per_lap2 * stint_lap * stint_lap

        # Tyre cliff: one step on the threshold lap, growing by one step per lap after it
        if self.cliff_start_lap is not None and stint_lap >= self.cliff_start_lap:
            over = stint_lap - self.cliff_start_lap + 1
            t += self.cliff_extra_seconds_per_lap * over

        # Fuel burn-off follows the race lap, not the stint lap
        t -= cfg.fuel_effect_per_lap_seconds * (race_lap - 1)

        t += cfg.traffic_penalty_seconds
        return t


# One section of the race between pit stops
@dataclass(frozen=True)
class StintPlan:
    compound: Compound
    laps: int

    def __post_init__(self) -> None:
        # "Soft" and Compound.SOFT must look up the same tyre model
        try:
            object.__setattr__(self, "compound", Compound.parse(self.compound))
        except ValueError as e:
            raise InvalidStrategy(str(e)) from e


# Named, ordered list of stints
@dataclass(frozen=True)
class StrategyPlan:
    name: str
    stints: Tuple[StintPlan, ...]

    def __init__(self, name: str, stints: Iterable[StintPlan]) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "stints", tuple(stints))
        if not self.stints:
            raise InvalidStrategy("Strategy must have at least one stint.")
        if any(not _is_int(s.laps) or s.laps <= 0 for s in self.stints):
            raise InvalidStrategy("Each stint must have > 0 laps.")

    @property
    def total_planned_laps(self) -> int:
        return sum(s.laps for s in self.stints)

    @property
    def pit_stops(self) -> int:  # pits happen between stints, never after the last one
        return len(self.stints) - 1


# One simulated lap
@dataclass(frozen=True)
class LapDetail:
    race_lap: int  # 1..total_laps
    stint_number: int  # 1..number of stints
    stint_lap: int  # 1..laps in the stint
    compound: Compound
    lap_time_seconds: float  # pure lap time, pit loss excluded
    pit_after_lap: bool  # a pit stop follows this lap


# Outcome of simulating one strategy
@dataclass(frozen=True)
class SimulationResult:
    strategy_name: str
    total_race_seconds: float  # all lap times plus all pit losses
    laps: Tuple[LapDetail, ...]
    pit_laps: Tuple[int, ...]  # pit after these race laps

    @property
    def pit_stops(self) -> int:
        return len(self.pit_laps)

    @property
    def lap_times(self) -> np.ndarray:
        return np.array([lap.lap_time_seconds for lap in self.laps], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """Per-lap trace, one row per race lap."""
        return pd.DataFrame(
            {
                "race_lap": [lap.race_lap for lap in self.laps],
                "stint_number": [lap.stint_number for lap in self.laps],
                "stint_lap": [lap.stint_lap for lap in self.laps],
                "compound": [lap.compound.value for lap in self.laps],
                "lap_time_s": self.lap_times,
                "pit_after_lap": [lap.pit_after_lap for lap in self.laps],
            },
            columns=["race_lap", "stint_number", "stint_lap", "compound", "lap_time_s", "pit_after_lap"],
        )

    def stint_summary(self) -> pd.DataFrame:
        df = self.to_frame()
        out = (
            df.groupby("stint_number", sort=True)
            .agg(
                compound=("compound", "first"),
                laps=("stint_lap", "size"),
                stint_time_s=("lap_time_s", "sum"),
                mean_lap_s=("lap_time_s", "mean"),
                best_lap_s=("lap_time_s", "min"),
            )
            .reset_index()
        )
        return out
