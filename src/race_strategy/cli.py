from __future__ import annotations
import argparse
import logging
from typing import List, Optional

from .config import default_setup, load_setup, parse_strategy
from .errors import StrategySimError
from .models import SimulationResult, StrategyPlan
from .simulator import RaceSimulator


def result_line(r: SimulationResult) -> str:
    pits = ", ".join(str(p) for p in r.pit_laps) if r.pit_laps else "none"
    return f"{r.strategy_name} | Total: {r.total_race_seconds:.3f}s | Pits after laps: {pits}"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Race strategy total-time simulator")
    parser.add_argument("--config", type=str, help="Race setup JSON (default: built-in 78-lap race)")
    parser.add_argument("--strategy", action="append", default=[],
                        help="Strategy to run, e.g. S-M-H=Soft:18,Medium:30,Hard:30 (repeatable)")
    parser.add_argument("--laps", action="store_true", help="Also print the per-stint breakdown")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Python logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        setup = load_setup(args.config) if args.config else default_setup()
        plans: List[StrategyPlan] = [parse_strategy(s) for s in args.strategy] or list(setup.strategies)
        if not plans:
            raise SystemExit("[error] No strategies given: use --strategy or add 'strategies' to the setup.")
        sim = RaceSimulator(setup.config, setup.tyres)
        results = sim.run_many(plans)
    except (StrategySimError, OSError) as e:
        raise SystemExit(f"[error] {e}")

    print(f"[info] {setup.config.total_laps} laps, pit loss {setup.config.pit_loss_seconds:.1f}s, "
          f"{len(results)} strategies")
    for r in results:
        print(result_line(r))
        if args.laps:
            print(r.stint_summary().to_string(index=False, float_format=lambda x: f"{x:.3f}"))

    if len(results) > 1:
        print()
        base = results[0]
        for r in results[1:]:
            print(f"Delta ({r.strategy_name} - {base.strategy_name}): "
                  f"{r.total_race_seconds - base.total_race_seconds:.3f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
