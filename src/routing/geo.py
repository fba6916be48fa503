"""
Great-circle distance helpers.

All distances in the routing package are statute miles and all durations
are minutes. Travel time is derived from straight-line distance at a fixed
average speed representative of mixed urban/highway driving.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


EARTH_RADIUS_MILES = 3958.8

# Mixed urban/highway driving; 30 mph means one mile takes two minutes.
AVERAGE_SPEED_MPH = 30.0


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate in decimal degrees."""
    lat: float
    lng: float


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points in miles.

    No range checking is done; out-of-range coordinates still produce a
    number, just not a meaningful one.
    """
    if not all(math.isfinite(v) for v in (lat1, lng1, lat2, lng2)):
        return math.nan

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Clamp so rounding on antipodal points can't push sqrt out of domain
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def travel_minutes(distance_miles: float) -> float:
    """Driving time in minutes for a straight-line distance."""
    return distance_miles / AVERAGE_SPEED_MPH * 60.0
