"""
Dynamic adjustment of an in-progress route.

Adding a stop uses cheapest insertion: O(N) distance lookups instead of a
full construction + 2-opt run. Removing a stop keeps the remaining order
as-is; the result may no longer be 2-opt optimal.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

from .models import Stop, with_sequence


DistanceFn = Callable[[Stop, Stop], float]


def insertion_costs(route: Sequence[Stop], new_stop: Stop, distance: DistanceFn) -> List[float]:
    """
    Increase in route distance for inserting ``new_stop`` at each gap.

    Position ``k`` means "before route[k]"; position ``len(route)`` means
    after the last stop. Inner gaps cost
    ``d(prev, new) + d(new, next) - d(prev, next)``.
    """
    n = len(route)
    if n == 0:
        return [0.0]

    costs = [distance(new_stop, route[0])]
    for k in range(1, n):
        prev, nxt = route[k - 1], route[k]
        costs.append(distance(prev, new_stop) + distance(new_stop, nxt) - distance(prev, nxt))
    costs.append(distance(route[-1], new_stop))
    return costs


def insert_stop(route: Sequence[Stop], new_stop: Stop, distance: DistanceFn) -> List[Stop]:
    """Insert at the cheapest gap (earliest gap on ties) and renumber 1..N."""
    costs = insertion_costs(route, new_stop, distance)
    best_position = min(range(len(costs)), key=lambda k: (costs[k], k))

    updated = list(route)
    updated.insert(best_position, new_stop)
    return with_sequence(updated)


def remove_stop(route: Sequence[Stop], stop_id: str) -> List[Stop]:
    """Drop the stop with ``stop_id`` and renumber the rest 1..N-1."""
    return with_sequence([stop for stop in route if stop.id != stop_id])
