import pytest

from race_strategy.config import default_setup
from race_strategy.simulator import RaceSimulator


@pytest.fixture
def race_setup():
    return default_setup()  # 78 laps, Soft/Medium/Hard with cliffs, S-M-H and M-H-H


@pytest.fixture
def sim(race_setup):
    return RaceSimulator(race_setup.config, race_setup.tyres)
