"""Single-route stop sequencing: construction heuristics, 2-opt and dynamic adjustment."""

from .geo import (
    Coordinate,
    haversine_miles,
    travel_minutes,
    EARTH_RADIUS_MILES,
    AVERAGE_SPEED_MPH,
)

from .models import (
    Stop,
    TimeWindow,
    Strategy,
    RouteConstraints,
    OptimizationOptions,
    RouteMetrics,
    Improvement,
    OptimizationResult,
    SegmentEstimate,
    validate_stops,
    with_sequence,
)

from .config import (
    EngineConfig,
    DEFAULT_CONFIG,
    load_engine_config,
)

from .matrix import (
    DistanceCache,
    build_distance_matrix,
    to_time_matrix,
)

from .construction import (
    nearest_neighbor,
    time_weighted_nearest_neighbor,
    value_density_greedy,
    resolve_stop_values,
    build_initial_order,
)

from .two_opt import (
    two_opt,
    route_distance,
    TwoOptResult,
)

from .metrics import evaluate_route

from .adjust import (
    insertion_costs,
    insert_stop,
    remove_stop,
)

from .optimizer import (
    RouteOptimizer,
    get_default_optimizer,
    optimize_route,
    calculate_route_metrics,
    adjust_route,
    estimate_segment,
    get_cache_stats,
    clear_cache,
)

from .frames import (
    stops_from_dataframe,
    route_to_dataframe,
)

__all__ = [
    # Geo
    "Coordinate",
    "haversine_miles",
    "travel_minutes",
    "EARTH_RADIUS_MILES",
    "AVERAGE_SPEED_MPH",

    # Data models
    "Stop",
    "TimeWindow",
    "Strategy",
    "RouteConstraints",
    "OptimizationOptions",
    "RouteMetrics",
    "Improvement",
    "OptimizationResult",
    "SegmentEstimate",
    "validate_stops",
    "with_sequence",

    # Configuration
    "EngineConfig",
    "DEFAULT_CONFIG",
    "load_engine_config",

    # Matrix and cache
    "DistanceCache",
    "build_distance_matrix",
    "to_time_matrix",

    # Construction
    "nearest_neighbor",
    "time_weighted_nearest_neighbor",
    "value_density_greedy",
    "resolve_stop_values",
    "build_initial_order",

    # Local search
    "two_opt",
    "route_distance",
    "TwoOptResult",

    # Metrics
    "evaluate_route",

    # Dynamic adjustment
    "insertion_costs",
    "insert_stop",
    "remove_stop",

    # Service
    "RouteOptimizer",
    "get_default_optimizer",
    "optimize_route",
    "calculate_route_metrics",
    "adjust_route",
    "estimate_segment",
    "get_cache_stats",
    "clear_cache",

    # Tabular adapters
    "stops_from_dataframe",
    "route_to_dataframe",
]
