"""
Pytest configuration and shared fixtures for stop-sequencer tests.

This file provides:
- Small geometric stop sets (square, line, widely spaced)
- Value-weighted stop sets for the profit strategy
- A fresh optimizer with an isolated cache per test
"""

from typing import Callable, List

import numpy as np
import pytest

from src.routing import RouteOptimizer, Stop


# ==============================================================================
# Geometric Stop Sets
# ==============================================================================

@pytest.fixture
def square_stops() -> List[Stop]:
    """Corners of a 1-degree square at the equator, origin at (0, 0)."""
    return [
        Stop(id="a", lat=0.0, lng=0.0),
        Stop(id="b", lat=0.0, lng=1.0),
        Stop(id="c", lat=1.0, lng=1.0),
        Stop(id="d", lat=1.0, lng=0.0),
    ]


@pytest.fixture
def crossed_square_stops(square_stops) -> List[Stop]:
    """Square corners supplied in a diagonal-crossing order: a, c, b, d."""
    a, b, c, d = square_stops
    return [a, c, b, d]


@pytest.fixture
def line_stops() -> List[Stop]:
    """Five stops spaced 0.1 degrees apart along the equator."""
    return [Stop(id=f"s{i}", lat=0.0, lng=0.1 * i) for i in range(5)]


@pytest.fixture
def spaced_stops() -> List[Stop]:
    """Ten stops hundreds of miles apart."""
    return [Stop(id=f"w{i}", lat=-40.0 + 8.0 * i, lng=-100.0 + 15.0 * (i % 4)) for i in range(10)]


@pytest.fixture
def profit_stops() -> List[Stop]:
    """Nine low-value stops clustered near the origin plus one far, high-value stop."""
    stops = [Stop(id=f"n{i}", lat=0.0, lng=0.01 * i, value=1.0) for i in range(9)]
    stops.insert(5, Stop(id="far", lat=2.0, lng=2.0, value=1000.0))
    return stops


@pytest.fixture
def random_stops() -> Callable[[int, int], List[Stop]]:
    """Factory for reproducible random stop sets in a ~70 mile box."""
    def _make(n: int, seed: int = 0) -> List[Stop]:
        rng = np.random.default_rng(seed)
        lats = 35.0 + rng.random(n)
        lngs = -97.0 + rng.random(n)
        return [Stop(id=f"r{i}", lat=float(lats[i]), lng=float(lngs[i])) for i in range(n)]
    return _make


# ==============================================================================
# Optimizer
# ==============================================================================

@pytest.fixture
def optimizer() -> RouteOptimizer:
    """Optimizer with default configuration and an empty private cache."""
    return RouteOptimizer()
