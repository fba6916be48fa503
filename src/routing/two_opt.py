"""
Best-improvement 2-opt local search over an open route.

Each pass evaluates every pair of non-adjacent edges (i, i+1) and (j, j+1)
and the effect of reversing the sub-path between them. The single best
strictly-improving reversal is applied, then scanning restarts. The loop
stops at a local optimum.

Position 0 is never moved: reversals always start at position 1 or later.
Since the route is open (no return leg), j may be the last position, in
which case the reversal replaces only edge (i, i+1).

2-opt compares distance only, whatever strategy built the input order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np


logger = logging.getLogger(__name__)


@dataclass
class TwoOptResult:
    order: List[int]
    distance: float
    iterations: int
    """Number of improving moves applied."""


def route_distance(order: Sequence[int], matrix: np.ndarray) -> float:
    """Sum of matrix entries for each consecutive pair in ``order``."""
    total = 0.0
    for k in range(len(order) - 1):
        total += matrix[order[k]][order[k + 1]]
    return float(total)


def _reversal_delta(order: Sequence[int], matrix: np.ndarray, i: int, j: int) -> float:
    a, b, c = order[i], order[i + 1], order[j]
    delta = matrix[a][c] - matrix[a][b]
    if j + 1 < len(order):
        d = order[j + 1]
        delta += matrix[b][d] - matrix[c][d]
    return float(delta)


def two_opt(
    order: Sequence[int],
    matrix: np.ndarray,
    epsilon: float = 1e-9,
) -> TwoOptResult:
    """
    Improve ``order`` with best-improvement 2-opt until no move helps.

    Args:
        order: Initial permutation of matrix indices
        matrix: Pairwise distance matrix
        epsilon: Minimum decrease counted as an improvement

    Returns:
        TwoOptResult with the locally optimal order; its distance is never
        greater than the input's
    """
    route = list(order)
    n = len(route)
    iterations = 0

    while True:
        best_delta = -epsilon
        best_move = None

        for i in range(n - 2):
            for j in range(i + 2, n):
                delta = _reversal_delta(route, matrix, i, j)
                if delta < best_delta:
                    best_delta = delta
                    best_move = (i, j)

        if best_move is None:
            break

        i, j = best_move
        route[i + 1:j + 1] = reversed(route[i + 1:j + 1])
        iterations += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"2-opt move {iterations}: reversed positions {i + 1}..{j}, delta={best_delta:.4f}")

    return TwoOptResult(order=route, distance=route_distance(route, matrix), iterations=iterations)
