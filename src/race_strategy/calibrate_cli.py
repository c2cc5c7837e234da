from __future__ import annotations
import argparse
import logging
from typing import List, Optional

from .calibration import calibrate_tyres, load_lap_frame
from .config import RaceSetup, save_setup
from .errors import StrategySimError
from .models import RaceConfig


def driver_codes(text: str) -> List[str]:
    """'ver, LEC,ver' -> ['VER', 'LEC'] (order kept, repeats dropped)."""
    codes = (x.strip().upper() for x in text.split(","))
    return list(dict.fromkeys(c for c in codes if c))


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="FastF1 laps -> fitted tyre models in a race setup JSON")
    p.add_argument("--year", type=int, required=True)
    p.add_argument("--gp", type=str, required=True, help="e.g., Monaco, Bahrain, Abu Dhabi")
    p.add_argument("--session", type=str, default="R", help="R,Q,SQ,FP1,FP2,FP3 (default R)")
    p.add_argument("--drivers", type=str, required=True, help="Comma-separated codes, e.g., VER,LEC,PER")
    # race constants written next to the fitted tyres
    p.add_argument("--laps", type=int, required=True, help="Race length in laps")
    p.add_argument("--pit-loss", type=float, default=21.5, help="Pit stop time loss (s)")
    p.add_argument("--fuel-effect", type=float, default=0.03, help="Lap time gained per race lap from fuel burn (s)")
    p.add_argument("--cache", type=str, default="./f1cache")
    p.add_argument("--out", type=str, help="Output JSON filename")
    p.add_argument("--log-level", type=str, default="INFO")
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    codes = driver_codes(args.drivers)
    if not codes:
        raise SystemExit("[error] No drivers selected.")
    out_path = args.out or f"{args.gp}_{args.year}_{args.session}_setup.json"

    try:
        cfg = RaceConfig(total_laps=args.laps, pit_loss_seconds=args.pit_loss,
                         fuel_effect_per_lap_seconds=args.fuel_effect)
    except StrategySimError as e:
        raise SystemExit(f"[error] {e}")

    print(f"[info] Loading {args.year} {args.gp} {args.session} laps for {', '.join(codes)}")
    df = load_lap_frame(args.year, args.gp, args.session, codes, cache_dir=args.cache)
    print(f"[info] {len(df)} clean laps")

    tyres = calibrate_tyres(df, cfg)
    if not tyres:
        raise SystemExit("[error] No compound had enough clean laps to fit.")
    for comp in tyres:
        print(f"[info] Fitted {comp}")

    save_setup(RaceSetup(cfg, tuple(tyres.values())), out_path)
    print(f"[ok] Wrote race setup to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
