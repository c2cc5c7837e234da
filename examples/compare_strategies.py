from race_strategy import Compound, RaceConfig, RaceSimulator, StintPlan, StrategyPlan, TyreModel
from race_strategy.cli import result_line

cfg = RaceConfig(total_laps=78, pit_loss_seconds=21.5, fuel_effect_per_lap_seconds=0.03)

tyres = [
    TyreModel(Compound.SOFT, 74.8, 0.060, 0.0006, cliff_start_lap=18, cliff_extra_seconds_per_lap=0.08),
    TyreModel(Compound.MEDIUM, 75.5, 0.040, 0.0004, cliff_start_lap=28, cliff_extra_seconds_per_lap=0.05),
    TyreModel(Compound.HARD, 76.2, 0.030, 0.0003, cliff_start_lap=40, cliff_extra_seconds_per_lap=0.03),
]

sim = RaceSimulator(cfg, tyres)
res_a = sim.run(StrategyPlan("S-M-H", [StintPlan(Compound.SOFT, 18), StintPlan(Compound.MEDIUM, 30), StintPlan(Compound.HARD, 30)]))
res_b = sim.run(StrategyPlan("M-H-H", [StintPlan(Compound.MEDIUM, 25), StintPlan(Compound.HARD, 27), StintPlan(Compound.HARD, 26)]))

print(result_line(res_a))
print(result_line(res_b))
print()
print(f"Delta (B - A): {res_b.total_race_seconds - res_a.total_race_seconds:.3f}s")
