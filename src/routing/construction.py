"""
Initial route construction heuristics.

Each builder takes a precomputed matrix and returns a permutation of stop
indices. They are greedy O(N^2) constructions; the 2-opt pass refines
their output afterwards.

- shortest:        nearest neighbor over the distance matrix, from index 0
- fastest:         nearest neighbor over the travel-time matrix, from index 0
- most_profitable: value-density greedy, from the highest-value stop
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .matrix import to_time_matrix
from .models import RouteConstraints, Stop, Strategy


BASE_STOP_VALUE = 100.0


def nearest_neighbor(matrix: np.ndarray, start: int = 0) -> List[int]:
    """
    Greedy nearest-neighbor order starting at ``start``.

    Ties go to the lowest index, so the result is deterministic.
    """
    n = len(matrix)
    if n == 0:
        return []

    visited = [False] * n
    order = [start]
    visited[start] = True
    current = start

    for _ in range(n - 1):
        nearest = -1
        nearest_cost = float("inf")
        for j in range(n):
            if not visited[j] and matrix[current][j] < nearest_cost:
                nearest_cost = matrix[current][j]
                nearest = j
        visited[nearest] = True
        order.append(nearest)
        current = nearest

    return order


def time_weighted_nearest_neighbor(distance_matrix: np.ndarray) -> List[int]:
    """Nearest neighbor over travel minutes instead of miles."""
    return nearest_neighbor(to_time_matrix(distance_matrix))


def resolve_stop_values(
    stops: Sequence[Stop],
    constraints: Optional[RouteConstraints] = None,
    base_value: float = BASE_STOP_VALUE,
) -> List[float]:
    """
    Value of each stop for profit purposes.

    An explicit ``Stop.value`` wins. Otherwise the value is
    ``base_value * priority``, where priority comes from the constraint
    set, then the stop itself, then defaults to 1.
    """
    priorities = constraints.priorities if constraints is not None else {}
    values = []
    for stop in stops:
        if stop.value is not None:
            values.append(float(stop.value))
            continue
        priority = priorities.get(stop.id)
        if priority is None:
            priority = stop.priority if stop.priority is not None else 1.0
        values.append(base_value * float(priority))
    return values


def value_density_greedy(distance_matrix: np.ndarray, values: Sequence[float]) -> List[int]:
    """
    Greedy order maximizing value per mile at each step.

    Starts at the highest-value stop (lowest index on ties) and repeatedly
    moves to the unvisited stop with the best ``value / distance`` ratio.
    A zero distance counts as one mile for the ratio only.
    """
    n = len(distance_matrix)
    if n == 0:
        return []

    best_value = max(values)
    current = list(values).index(best_value)
    visited = [False] * n
    visited[current] = True
    order = [current]

    for _ in range(n - 1):
        best = -1
        best_ratio = float("-inf")
        for j in range(n):
            if visited[j]:
                continue
            distance = distance_matrix[current][j] or 1.0
            ratio = values[j] / distance
            if ratio > best_ratio:
                best_ratio = ratio
                best = j
        visited[best] = True
        order.append(best)
        current = best

    return order


def build_initial_order(
    strategy: Strategy,
    distance_matrix: np.ndarray,
    stops: Sequence[Stop],
    constraints: Optional[RouteConstraints] = None,
    base_value: float = BASE_STOP_VALUE,
) -> List[int]:
    """Dispatch to the construction heuristic for ``strategy``."""
    strategy = Strategy.coerce(strategy)

    if len(stops) <= 1:
        return list(range(len(stops)))

    if strategy is Strategy.FASTEST:
        return time_weighted_nearest_neighbor(distance_matrix)
    if strategy is Strategy.MOST_PROFITABLE:
        values = resolve_stop_values(stops, constraints, base_value)
        return value_density_greedy(distance_matrix, values)
    return nearest_neighbor(distance_matrix)
