"""
Route metrics and feasibility evaluation.

Metrics are derived fresh for every route and never cached. A route that
breaks a constraint is reported as infeasible with a list of violations;
it is never an error.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .config import DEFAULT_CONFIG, EngineConfig
from .construction import resolve_stop_values
from .geo import haversine_miles, travel_minutes
from .matrix import DistanceCache
from .models import RouteConstraints, RouteMetrics, Stop


def _format_minutes(minutes: float) -> str:
    if minutes >= 60 and minutes % 60 == 0:
        hours = int(minutes // 60)
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    if float(minutes).is_integer():
        whole = int(minutes)
        return f"{whole} minute" if whole == 1 else f"{whole} minutes"
    return f"{minutes:g} minutes"


def _leg_distances(
    stops: Sequence[Stop],
    matrix: Optional[np.ndarray],
    cache: Optional[DistanceCache],
) -> List[float]:
    legs = []
    for k in range(len(stops) - 1):
        if matrix is not None:
            legs.append(float(matrix[k][k + 1]))
        elif cache is not None:
            legs.append(cache.distance(stops[k], stops[k + 1]))
        else:
            a, b = stops[k], stops[k + 1]
            legs.append(haversine_miles(a.lat, a.lng, b.lat, b.lng))
    return legs


def evaluate_route(
    stops: Sequence[Stop],
    *,
    matrix: Optional[np.ndarray] = None,
    cache: Optional[DistanceCache] = None,
    constraints: Optional[RouteConstraints] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> RouteMetrics:
    """
    Score a route given in visiting order.

    Args:
        stops: Stops in route order
        matrix: Distance matrix indexed in the same order as ``stops``.
                When None, legs come from ``cache`` or are recomputed.
        cache: Distance cache used when no matrix is supplied
        constraints: Limits to check; the default max duration applies when unset
        config: Engine configuration (service time, default limits, base value)

    Returns:
        RouteMetrics with totals, arrival offsets and any violations
    """
    n = len(stops)
    legs = _leg_distances(stops, matrix, cache)

    total_distance = 0.0
    for leg in legs:
        total_distance += leg
    travel_total = travel_minutes(total_distance)
    total_duration = travel_total + n * config.service_time_min

    values = resolve_stop_values(stops, constraints, config.base_stop_value)
    total_profit = float(sum(values))

    violations: List[str] = []

    max_duration = config.default_max_duration_min
    max_distance = None
    windows = {}
    if constraints is not None:
        if constraints.max_duration_min is not None:
            max_duration = constraints.max_duration_min
        max_distance = constraints.max_distance_miles
        windows = constraints.time_windows

    if total_duration > max_duration:
        violations.append(f"Route exceeds maximum duration of {_format_minutes(max_duration)}")

    if max_distance is not None and total_distance > max_distance:
        violations.append(f"Route exceeds maximum distance of {max_distance:g} miles")

    # Timeline: waiting for a window to open delays later stops but is not
    # counted in total_duration.
    arrivals: List[float] = []
    clock = 0.0
    for k, stop in enumerate(stops):
        arrivals.append(clock)
        window = windows.get(stop.id, stop.time_window)
        if window is not None:
            if clock < window.earliest_min:
                clock = window.earliest_min
            elif clock > window.latest_min:
                violations.append(
                    f"Stop {stop.id} arrives at {clock:.0f} min, "
                    f"after its window closes at {window.latest_min:g} min"
                )
        clock += config.service_time_min
        if k < len(legs):
            clock += travel_minutes(legs[k])

    return RouteMetrics(
        total_distance=total_distance,
        total_duration=total_duration,
        total_profit=total_profit,
        feasible=not violations,
        violations=violations,
        arrival_minutes=arrivals,
        num_stops=n,
    )
