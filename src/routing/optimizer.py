"""
Route optimizer service.

Ties the pieces together for one mobile worker:

    stops + options
      -> distance matrix (cached pairwise)
      -> strategy-specific construction
      -> 2-opt refinement
      -> metrics for the original and the optimized order

Everything here is synchronous, in-memory computation. The only shared
mutable state is the distance cache, which is lock-protected, so one
optimizer may serve concurrent callers working on independent stop sets.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np

from .adjust import insert_stop, remove_stop
from .config import EngineConfig, load_engine_config
from .construction import build_initial_order
from .geo import Coordinate, haversine_miles, travel_minutes
from .matrix import DistanceCache, build_distance_matrix
from .metrics import evaluate_route
from .models import (
    Improvement,
    OptimizationOptions,
    OptimizationResult,
    RouteConstraints,
    RouteMetrics,
    SegmentEstimate,
    Stop,
    validate_stops,
    with_sequence,
)
from .two_opt import two_opt


logger = logging.getLogger(__name__)


ADJUST_ACTIONS = ("add", "remove")


class RouteOptimizer:
    """
    Single-route stop sequencing engine.

    Each instance owns a distance cache. Pass one in to share it between
    optimizers, or construct separate instances for isolated caches.
    """

    def __init__(
        self,
        cache: Optional[DistanceCache] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or EngineConfig()
        self.cache = cache if cache is not None else DistanceCache(maxsize=self.config.cache_maxsize)

    def optimize_route(
        self,
        stops: Sequence[Stop],
        options: Optional[OptimizationOptions] = None,
    ) -> OptimizationResult:
        """
        Reorder ``stops`` into an efficient visiting sequence.

        Args:
            stops: Stops to visit; the first is the route origin for the
                   distance-based strategies
            options: Strategy and constraints (shortest, no constraints if None)

        Returns:
            OptimizationResult with sequenced stops, metrics and the
            improvement over the input order

        Raises:
            ValueError: If any stop or constraint is malformed
        """
        options = options or OptimizationOptions()
        constraints = options.constraints
        validate_stops(stops, constraints)
        stops = list(stops)

        # Two or fewer stops: nothing to reorder, skip construction and 2-opt.
        if len(stops) <= 2:
            metrics = self.calculate_route_metrics(stops, constraints)
            return OptimizationResult(
                optimized_stops=stops,
                metrics=metrics,
                original_metrics=metrics,
                improvement=Improvement(),
                strategy=options.strategy,
            )

        matrix = build_distance_matrix(stops, self.cache)
        original_metrics = evaluate_route(
            stops, matrix=matrix, constraints=constraints, config=self.config
        )

        initial = build_initial_order(
            options.strategy, matrix, stops, constraints, self.config.base_stop_value
        )
        improved = two_opt(initial, matrix, epsilon=self.config.improvement_epsilon)

        optimized_stops = with_sequence([stops[i] for i in improved.order])
        route_matrix = matrix[np.ix_(improved.order, improved.order)]
        metrics = evaluate_route(
            optimized_stops, matrix=route_matrix, constraints=constraints, config=self.config
        )

        improvement = Improvement(
            distance_saved=original_metrics.total_distance - metrics.total_distance,
            time_saved=original_metrics.total_duration - metrics.total_duration,
        )

        logger.info(
            f"Optimized {len(stops)} stops with strategy={options.strategy.value}: "
            f"{metrics.total_distance:.2f} mi, saved {improvement.distance_saved:.2f} mi "
            f"after {improved.iterations} 2-opt moves"
        )
        if not metrics.feasible:
            logger.info(f"Optimized route is infeasible: {'; '.join(metrics.violations)}")

        return OptimizationResult(
            optimized_stops=optimized_stops,
            metrics=metrics,
            original_metrics=original_metrics,
            improvement=improvement,
            strategy=options.strategy,
            two_opt_iterations=improved.iterations,
        )

    def calculate_route_metrics(
        self,
        stops: Sequence[Stop],
        constraints: Optional[RouteConstraints] = None,
    ) -> RouteMetrics:
        """Metrics for ``stops`` in the order given, using the shared cache."""
        return evaluate_route(
            list(stops), cache=self.cache, constraints=constraints, config=self.config
        )

    def adjust_route(
        self,
        current_stops: Sequence[Stop],
        stop: Union[Stop, str],
        action: str,
    ) -> list:
        """
        Add or remove one stop without re-optimizing the whole route.

        Args:
            current_stops: Route in its current order
            stop: Stop to add, or the stop (or its id) to remove
            action: "add" for cheapest insertion, "remove" to drop the stop

        Returns:
            New route with sequence positions renumbered from 1

        Raises:
            ValueError: For an unknown action or malformed input
        """
        if action not in ADJUST_ACTIONS:
            raise ValueError(
                f"Unknown adjust action '{action}'. Valid actions: {', '.join(ADJUST_ACTIONS)}"
            )

        if action == "remove":
            stop_id = stop.id if isinstance(stop, Stop) else str(stop)
            return remove_stop(current_stops, stop_id)

        if not isinstance(stop, Stop):
            raise ValueError(f"Adding requires a Stop, got {type(stop).__name__}")
        validate_stops(list(current_stops) + [stop])
        return insert_stop(current_stops, stop, self.cache.distance)

    def estimate_segment(self, origin: Coordinate, destination: Coordinate) -> SegmentEstimate:
        """Straight-line distance (miles) and driving time (minutes) between two points."""
        distance = haversine_miles(origin.lat, origin.lng, destination.lat, destination.lng)
        return SegmentEstimate(distance=distance, duration=travel_minutes(distance))

    def clear_cache(self) -> None:
        """Clear cached distances, e.g. after a stop's coordinates are corrected."""
        self.cache.clear()

    def cache_stats(self) -> Dict[str, Any]:
        return self.cache.stats()


# -----------------------------
# Module-level default instance
# -----------------------------

_default_optimizer: Optional[RouteOptimizer] = None
_default_lock = threading.Lock()


def get_default_optimizer() -> RouteOptimizer:
    """Process-wide optimizer configured from the active profile."""
    global _default_optimizer
    with _default_lock:
        if _default_optimizer is None:
            _default_optimizer = RouteOptimizer(config=load_engine_config())
        return _default_optimizer


def optimize_route(
    stops: Sequence[Stop],
    options: Optional[OptimizationOptions] = None,
) -> OptimizationResult:
    return get_default_optimizer().optimize_route(stops, options)


def calculate_route_metrics(
    stops: Sequence[Stop],
    constraints: Optional[RouteConstraints] = None,
) -> RouteMetrics:
    return get_default_optimizer().calculate_route_metrics(stops, constraints)


def adjust_route(current_stops: Sequence[Stop], stop: Union[Stop, str], action: str) -> list:
    return get_default_optimizer().adjust_route(current_stops, stop, action)


def estimate_segment(origin: Coordinate, destination: Coordinate) -> SegmentEstimate:
    return get_default_optimizer().estimate_segment(origin, destination)


def get_cache_stats() -> Dict[str, Any]:
    """Get current cache statistics for the default optimizer."""
    return get_default_optimizer().cache_stats()


def clear_cache() -> None:
    """Clear the default optimizer's distance cache."""
    get_default_optimizer().clear_cache()
