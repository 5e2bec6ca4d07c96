"""Greedy particle ordering.

Particles arrive in whatever order the simulation stored them.  Drawing
them in that order makes the effector zig-zag across the volume, so the
planner can reorder them first:

    1. pick a uniformly random starting particle;
    2. repeatedly take the remaining particle whose ``location`` is closest
       to the last one taken (first index on ties);
    3. stop when none remain.

This is a nearest-neighbour approximation of a shortest Hamiltonian path,
not an optimal route.  The random start varies the traversal between
frames, which hides repeating artefacts in the final exposure.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from lightpath.curves.types import Particle

logger = logging.getLogger(__name__)


def _locations(particles: Sequence[Particle]) -> np.ndarray:
    return np.array([p.location.as_tuple() for p in particles], dtype=np.float64).reshape(-1, 3)


def order_particles(
    particles: Sequence[Particle],
    rng: np.random.Generator | None = None,
) -> list[Particle]:
    """Reorder particles by greedy nearest neighbour from a random start.

    Parameters
    ----------
    particles : Sequence[Particle]
        Particles in any order.
    rng : np.random.Generator | None
        Source for the starting index.  ``None`` uses a fresh unseeded
        generator.

    Returns
    -------
    list[Particle]
        Every input particle exactly once.
    """
    if not particles:
        return []
    rng = rng if rng is not None else np.random.default_rng()

    locations = _locations(particles)
    remaining = np.ones(len(particles), dtype=bool)

    current = int(rng.integers(len(particles)))
    order = [current]
    remaining[current] = False

    for _ in range(len(particles) - 1):
        candidates = np.flatnonzero(remaining)
        dists = np.linalg.norm(locations[candidates] - locations[current], axis=1)
        current = int(candidates[int(np.argmin(dists))])
        order.append(current)
        remaining[current] = False

    logger.debug("Ordered %d particles starting at index %d", len(order), order[0])
    return [particles[i] for i in order]


def route_length(particles: Sequence[Particle]) -> float:
    """Sum of location-to-location distances along an ordering (mm)."""
    if len(particles) < 2:
        return 0.0
    locations = _locations(particles)
    return float(np.linalg.norm(np.diff(locations, axis=0), axis=1).sum())
