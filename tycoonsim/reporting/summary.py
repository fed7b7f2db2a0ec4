"""Summary table generation."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from tycoonsim.utils.io import save_table


def summarize_timeseries(timeseries: pd.DataFrame) -> pd.DataFrame:
    """Return per-instrument price statistics for a tick run."""

    required = {"tick", "symbol", "price", "trend"}
    missing = required - set(timeseries.columns)
    if missing:
        raise ValueError(f"Timeseries missing columns: {sorted(missing)}")
    rows = []
    for symbol, group in timeseries.sort_values("tick").groupby("symbol", sort=False):
        first = float(group["price"].iloc[0])
        final = float(group["price"].iloc[-1])
        steps = group.iloc[1:]
        rows.append(
            {
                "symbol": symbol,
                "first_price": first,
                "final_price": final,
                "peak_price": float(group["price"].max()),
                "min_price": float(group["price"].min()),
                "return_pct": (final - first) / first * 100.0 if first else 0.0,
                "up_ticks": int((steps["trend"] == "up").sum()),
                "down_ticks": int((steps["trend"] == "down").sum()),
            }
        )
    return pd.DataFrame(rows)


def export_summary(timeseries: pd.DataFrame, out_dir: Path, name: str = "summary") -> Path:
    return save_table(summarize_timeseries(timeseries), out_dir, name)


__all__ = ["summarize_timeseries", "export_summary"]
