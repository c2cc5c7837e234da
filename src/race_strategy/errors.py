"""Exceptions raised by the race strategy simulator."""

from __future__ import annotations


class StrategySimError(Exception):
    """Base exception for all simulator errors."""


class InvalidConfig(StrategySimError, ValueError):
    """Raised when race constants, tyre models or a setup document are malformed."""


class InvalidStrategy(StrategySimError, ValueError):
    """Raised when a strategy plan cannot be simulated for the configured race."""

    def __init__(self, message: str, planned_laps: int | None = None, race_laps: int | None = None) -> None:
        self.planned_laps = planned_laps
        self.race_laps = race_laps
        super().__init__(message)


class MissingTyreModel(StrategySimError, LookupError):
    """Raised when a stint uses a compound that has no registered tyre model."""

    def __init__(self, compound) -> None:
        self.compound = compound
        super().__init__(f"No tyre model provided for {compound}.")


class DuplicateTyreModel(StrategySimError, ValueError):
    """Raised when two tyre models are registered for the same compound."""

    def __init__(self, compound) -> None:
        self.compound = compound
        super().__init__(f"More than one tyre model provided for {compound}.")
