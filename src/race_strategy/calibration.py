from __future__ import annotations
import logging
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
import fastf1
import statsmodels.api as sm

from .models import Compound, RaceConfig, TyreModel

logger = logging.getLogger(__name__)

# FastF1 compound labels -> our compounds (wets/inters/test tyres are ignored)
FASTF1_COMPOUNDS = {"SOFT": Compound.SOFT, "MEDIUM": Compound.MEDIUM, "HARD": Compound.HARD}


# ---------- Loading ----------

def load_session(year: int, gp: str, session_code: str = "R", cache_dir: str = "./f1cache"):
    """FastF1 session with laps only; telemetry, weather and messages are not needed for tyre fits."""
    fastf1.Cache.enable_cache(cache_dir)
    session = fastf1.get_session(year, gp, session_code)
    session.load(laps=True, telemetry=False, weather=False, messages=False)
    logger.info("Loaded %s %s %s: %d laps", year, gp, session_code, len(session.laps))
    return session


def clean_laps(laps: pd.DataFrame) -> pd.DataFrame:
    """
    Reduce FastF1 laps to the rows a tyre model can be fitted on.
    Returns Driver, race_lap, stint_lap, compound, lap_time_s.
    """
    df = laps.copy()
    # Stint lap is counted on the full frame so dropped in/out laps don't shift it
    first = df.groupby(["Driver", "Stint"])["LapNumber"].transform("min")
    df["stint_lap"] = (df["LapNumber"] - first + 1)
    # Laps FastF1 could not place in a stint (or without a lap number) cannot be aged
    df = df.dropna(subset=["LapNumber", "stint_lap"])

    if "PitInTime" in df.columns:
        df = df[df["PitInTime"].isna()]
    if "PitOutTime" in df.columns:
        df = df[df["PitOutTime"].isna()]
    if "TrackStatus" in df.columns:
        # '1' = green; anything else had a yellow, SC or VSC on it
        df = df[df["TrackStatus"].fillna("1").astype(str) == "1"]

    df = df[df["LapTime"].notna()]
    df = df[df["Compound"].astype(str).str.upper().isin(list(FASTF1_COMPOUNDS))]

    out = pd.DataFrame({
        "Driver": df["Driver"],
        "race_lap": df["LapNumber"].astype(int),
        "stint_lap": df["stint_lap"].astype(int),
        "compound": df["Compound"].astype(str).str.upper().map(lambda c: FASTF1_COMPOUNDS[c].value),
        "lap_time_s": df["LapTime"].dt.total_seconds(),
    })
    return out.reset_index(drop=True)


def load_lap_frame(year: int, gp: str, session_code: str, drivers: List[str],
                   cache_dir: str = "./f1cache") -> pd.DataFrame:
    ses = load_session(year, gp, session_code, cache_dir=cache_dir)
    return clean_laps(ses.laps.pick_drivers(drivers))


# ---------- Modeling ----------

def fit_tyre_model(
    df: pd.DataFrame,
    compound: Compound,
    config: RaceConfig,
    cliff_start_lap: Optional[int] = None,
    cliff_extra_seconds_per_lap: float = 0.0,
) -> TyreModel:
    """
    Fit: lap_time + fuel*(race_lap-1) - traffic - cliff = base + lin*stint_lap + quad*stint_lap^2
    Fuel, traffic and cliff are taken as known; only the three tyre coefficients are estimated.
    """
    d = df[df["compound"] == compound.value]
    if len(d) < 3 or d["stint_lap"].nunique() < 3:
        raise ValueError(f"Insufficient data for {compound} ({len(d)} laps, "
                         f"{d['stint_lap'].nunique()} distinct stint laps)")

    stint_lap = d["stint_lap"].to_numpy(dtype="float64")
    y = (d["lap_time_s"].to_numpy(dtype="float64")
         + config.fuel_effect_per_lap_seconds * (d["race_lap"].to_numpy(dtype="float64") - 1)
         - config.traffic_penalty_seconds)
    if cliff_start_lap is not None:
        over = np.clip(stint_lap - cliff_start_lap + 1, 0, None)
        y = y - cliff_extra_seconds_per_lap * over

    X = pd.DataFrame({"stint_lap": stint_lap, "stint_lap2": stint_lap ** 2})
    X = sm.add_constant(X, has_constant="add")
    params = sm.OLS(y, X).fit().params

    return TyreModel(
        compound=compound,
        base_lap_seconds=float(params["const"]),
        linear_deg_seconds_per_lap=float(params["stint_lap"]),
        quadratic_deg_seconds_per_lap2=float(params["stint_lap2"]),
        cliff_start_lap=cliff_start_lap,
        cliff_extra_seconds_per_lap=cliff_extra_seconds_per_lap,
    )


def calibrate_tyres(df: pd.DataFrame, config: RaceConfig) -> Dict[Compound, TyreModel]:
    out: Dict[Compound, TyreModel] = {}
    for comp in Compound:
        if not (df["compound"] == comp.value).any():
            continue
        try:
            out[comp] = fit_tyre_model(df, comp, config)
        except ValueError as e:
            logger.warning("Skipping %s: %s", comp, e)
            continue
        logger.info("%s: base %.3f, lin %.4f, quad %.5f", comp, out[comp].base_lap_seconds,
                    out[comp].linear_deg_seconds_per_lap, out[comp].quadratic_deg_seconds_per_lap2)
    return out
