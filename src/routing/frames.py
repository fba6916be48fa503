"""
pandas adapters for callers that hold jobs in tabular form.

Input columns: id, lat, lng, and optionally priority, value,
earliest_min, latest_min. Missing optional values (NaN/None) are treated
as unset.
"""

from __future__ import annotations

from typing import List, Optional

import pandas as pd

from .geo import haversine_miles
from .models import OptimizationResult, Stop, TimeWindow


REQUIRED_COLUMNS = ("id", "lat", "lng")


def _optional_float(row, column: str) -> Optional[float]:
    value = row.get(column, None)
    if value is None or pd.isna(value):
        return None
    return float(value)


def stops_from_dataframe(df: pd.DataFrame) -> List[Stop]:
    """
    Convert a DataFrame of jobs into stops, preserving row order.

    Raises:
        ValueError: If a required column is missing
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Stop DataFrame is missing required columns: {', '.join(missing)}")

    stops: List[Stop] = []
    for row in df.to_dict("records"):
        earliest = _optional_float(row, "earliest_min")
        latest = _optional_float(row, "latest_min")
        window = None
        if earliest is not None or latest is not None:
            window = TimeWindow(
                earliest_min=earliest if earliest is not None else 0.0,
                latest_min=latest if latest is not None else float("inf"),
            )

        stops.append(Stop(
            id=str(row["id"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
            priority=_optional_float(row, "priority"),
            time_window=window,
            value=_optional_float(row, "value"),
        ))

    return stops


def route_to_dataframe(result: OptimizationResult) -> pd.DataFrame:
    """
    Tabulate an optimized route: one row per stop in visiting order.

    Columns: sequence, id, lat, lng, arrival_min, distance_from_prev
    """
    stops = result.optimized_stops
    arrivals = result.metrics.arrival_minutes
    rows = []
    for position, stop in enumerate(stops):
        if position == 0:
            leg = 0.0
        else:
            prev = stops[position - 1]
            leg = haversine_miles(prev.lat, prev.lng, stop.lat, stop.lng)
        rows.append({
            "sequence": stop.sequence if stop.sequence is not None else position + 1,
            "id": stop.id,
            "lat": stop.lat,
            "lng": stop.lng,
            "arrival_min": arrivals[position] if position < len(arrivals) else None,
            "distance_from_prev": leg,
        })

    return pd.DataFrame(
        rows,
        columns=["sequence", "id", "lat", "lng", "arrival_min", "distance_from_prev"],
    )
