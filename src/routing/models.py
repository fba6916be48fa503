"""
Data models for single-route stop sequencing.

Stops and options are immutable value objects supplied per request.
Metrics and results are derived and recomputed for every route.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence


class Strategy(str, Enum):
    """Objective used to build the initial visiting order."""
    SHORTEST = "shortest"
    FASTEST = "fastest"
    MOST_PROFITABLE = "most_profitable"

    @classmethod
    def coerce(cls, value: "Strategy | str") -> "Strategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strategy '{value}'. Valid strategies: {valid}") from None


@dataclass(frozen=True)
class TimeWindow:
    """Acceptable arrival window, in minutes after the route starts."""

    earliest_min: float
    latest_min: float


@dataclass(frozen=True)
class Stop:
    """A single point to visit."""

    id: str
    lat: float
    lng: float
    priority: Optional[float] = None
    time_window: Optional[TimeWindow] = None
    value: Optional[float] = None
    sequence: Optional[int] = None
    """1-based position in a sequenced route; None until sequenced."""


@dataclass(frozen=True)
class RouteConstraints:
    """
    Optional limits checked by the metrics evaluator.

    Attributes:
        max_duration_min: Maximum total route duration. None uses the engine default.
        max_distance_miles: Maximum total route distance. None means unlimited.
        time_windows: Per-stop windows keyed by stop id (override Stop.time_window)
        priorities: Per-stop priority weights keyed by stop id (override Stop.priority)
    """
    max_duration_min: Optional[float] = None
    max_distance_miles: Optional[float] = None
    time_windows: Mapping[str, TimeWindow] = field(default_factory=dict)
    priorities: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class OptimizationOptions:
    """Strategy selection plus optional constraints."""

    strategy: Strategy = Strategy.SHORTEST
    constraints: Optional[RouteConstraints] = None

    def __post_init__(self):
        object.__setattr__(self, "strategy", Strategy.coerce(self.strategy))


@dataclass
class RouteMetrics:
    """Aggregate quality figures for one candidate route."""

    total_distance: float
    """Sum of consecutive leg distances (miles)."""

    total_duration: float
    """Travel time plus per-stop service time (minutes)."""

    total_profit: float
    """Sum of resolved stop values."""

    feasible: bool
    violations: List[str] = field(default_factory=list)
    arrival_minutes: List[float] = field(default_factory=list)
    """Arrival offset at each stop, in route order."""

    num_stops: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Improvement:
    distance_saved: float = 0.0
    time_saved: float = 0.0


@dataclass
class OptimizationResult:
    """Result from a full optimization run."""

    optimized_stops: List[Stop]
    metrics: RouteMetrics
    original_metrics: RouteMetrics
    improvement: Improvement
    strategy: Strategy
    two_opt_iterations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "optimized_stops": [asdict(s) for s in self.optimized_stops],
            "metrics": self.metrics.to_dict(),
            "original_metrics": self.original_metrics.to_dict(),
            "improvement": asdict(self.improvement),
            "strategy": self.strategy.value,
            "two_opt_iterations": self.two_opt_iterations,
        }


@dataclass(frozen=True)
class SegmentEstimate:
    distance: float
    duration: float


def _coordinate_problem(stop: Stop) -> Optional[str]:
    try:
        lat, lng = float(stop.lat), float(stop.lng)
    except (TypeError, ValueError):
        return f"non-numeric coordinates ({stop.lat!r}, {stop.lng!r})"
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return f"non-finite coordinates ({lat}, {lng})"
    if not -90.0 <= lat <= 90.0:
        return f"latitude {lat} outside [-90, 90]"
    if not -180.0 <= lng <= 180.0:
        return f"longitude {lng} outside [-180, 180]"
    return None


def validate_stops(stops: Sequence[Stop], constraints: Optional[RouteConstraints] = None) -> None:
    """
    Validate caller-supplied stops and constraints before optimizing.

    Args:
        stops: Stops to check
        constraints: Optional constraint set to check alongside

    Raises:
        ValueError: Listing every problem found
    """
    problems: List[str] = []
    seen = set()

    for position, stop in enumerate(stops):
        if not isinstance(stop, Stop):
            problems.append(f"  - item {position} is {type(stop).__name__}, not Stop")
            continue
        if not isinstance(stop.id, str) or not stop.id:
            problems.append(f"  - item {position} has id {stop.id!r}; ids must be non-empty strings")
            continue
        if stop.id in seen:
            problems.append(f"  - duplicate stop id '{stop.id}'")
        seen.add(stop.id)

        issue = _coordinate_problem(stop)
        if issue:
            problems.append(f"  - stop '{stop.id}': {issue}")

        window = stop.time_window
        if window is not None and window.earliest_min > window.latest_min:
            problems.append(
                f"  - stop '{stop.id}': time window opens at {window.earliest_min} "
                f"but closes at {window.latest_min}"
            )

    if constraints is not None:
        if constraints.max_duration_min is not None and constraints.max_duration_min < 0:
            problems.append(f"  - max_duration_min must be >= 0, got {constraints.max_duration_min}")
        if constraints.max_distance_miles is not None and constraints.max_distance_miles < 0:
            problems.append(f"  - max_distance_miles must be >= 0, got {constraints.max_distance_miles}")
        for stop_id, window in constraints.time_windows.items():
            if window.earliest_min > window.latest_min:
                problems.append(
                    f"  - time window for '{stop_id}' opens at {window.earliest_min} "
                    f"but closes at {window.latest_min}"
                )

    if problems:
        raise ValueError("Invalid route input:\n" + "\n".join(problems))


def with_sequence(stops: Sequence[Stop]) -> List[Stop]:
    """Copies of ``stops`` with sequence positions renumbered 1..N."""
    return [replace(stop, sequence=position) for position, stop in enumerate(stops, start=1)]
