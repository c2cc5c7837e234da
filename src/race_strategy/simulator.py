from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from .errors import DuplicateTyreModel, InvalidStrategy, MissingTyreModel
from .models import Compound, LapDetail, RaceConfig, SimulationResult, StrategyPlan, TyreModel

logger = logging.getLogger(__name__)


def lap_time_seconds(tyre: TyreModel, race_lap: int, stint_lap: int, config: RaceConfig) -> float:
    return tyre.lap_time_seconds(race_lap, stint_lap, config)


# Walks a strategy lap by lap: tyre degradation, fuel burn-off and pit losses between stints
class RaceSimulator:
    def __init__(self, config: RaceConfig, tyre_models: Iterable[TyreModel]):
        tyres: Dict[Compound, TyreModel] = {}
        for tyre in tyre_models:
            if tyre.compound in tyres:
                raise DuplicateTyreModel(tyre.compound)
            tyres[tyre.compound] = tyre
        self.config = config
        self.tyres: Mapping[Compound, TyreModel] = MappingProxyType(tyres)

    def run(self, plan: StrategyPlan) -> SimulationResult:
        cfg = self.config
        if plan.total_planned_laps != cfg.total_laps:
            raise InvalidStrategy(
                f"Strategy laps ({plan.total_planned_laps}) must equal race laps ({cfg.total_laps}).",
                planned_laps=plan.total_planned_laps,
                race_laps=cfg.total_laps,
            )

        laps: List[LapDetail] = []
        pit_laps: List[int] = []
        total = 0.0
        race_lap = 0
        last_stint = len(plan.stints) - 1

        for si, stint in enumerate(plan.stints):
            tyre = self.tyres.get(stint.compound)
            if tyre is None:
                raise MissingTyreModel(stint.compound)

            for stint_lap in range(1, stint.laps + 1):
                race_lap += 1
                t = lap_time_seconds(tyre, race_lap, stint_lap, cfg)
                total += t

                pit_after = si < last_stint and stint_lap == stint.laps
                if pit_after:
                    total += cfg.pit_loss_seconds
                    pit_laps.append(race_lap)

                laps.append(LapDetail(
                    race_lap=race_lap,
                    stint_number=si + 1,
                    stint_lap=stint_lap,
                    compound=stint.compound,
                    lap_time_seconds=t,
                    pit_after_lap=pit_after,
                ))

        logger.debug("%s: %.3fs over %d laps, pits after %s", plan.name, total, race_lap, pit_laps)
        return SimulationResult(
            strategy_name=plan.name,
            total_race_seconds=total,
            laps=tuple(laps),
            pit_laps=tuple(pit_laps),
        )

    def run_many(self, plans: Iterable[StrategyPlan]) -> List[SimulationResult]:
        return [self.run(p) for p in plans]
