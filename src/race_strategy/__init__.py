from .errors import (
    DuplicateTyreModel,
    InvalidConfig,
    InvalidStrategy,
    MissingTyreModel,
    StrategySimError,
)
from .models import (
    Compound,
    LapDetail,
    RaceConfig,
    SimulationResult,
    StintPlan,
    StrategyPlan,
    TyreModel,
)
from .simulator import RaceSimulator, lap_time_seconds

__all__ = [
    "Compound",
    "RaceConfig",
    "TyreModel",
    "StintPlan",
    "StrategyPlan",
    "LapDetail",
    "SimulationResult",
    "RaceSimulator",
    "lap_time_seconds",
    "StrategySimError",
    "InvalidConfig",
    "InvalidStrategy",
    "MissingTyreModel",
    "DuplicateTyreModel",
]
