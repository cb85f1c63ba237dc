# MIT License (see LICENSE)
"""
Particle/particle collision resolution.

Every particle is a disc of its own radius. A pass visits all unordered
pairs (i, j), i < j, in ascending index order and pushes overlapping
pairs apart along their separation vector, splitting the penetration
depth in proportion to each particle's inverse mass.

The pass is brute force O(n²) across all particles regardless of body
membership. Pairs are corrected in place as they are visited, so later
pairs see the already-moved positions (Gauss-Seidel); the visiting order
therefore affects the result and is kept fixed for reproducibility.
"""
from __future__ import annotations
import math
from typing import Iterator

from ..constants import EPSILON
from ..types import Particle


def overlapping_pairs(particles: list[Particle]) -> Iterator[tuple[int, int]]:
    """Yield index pairs (i, j), i < j, whose discs currently overlap."""
    n = len(particles)
    for i in range(n):
        pi = particles[i]
        for j in range(i + 1, n):
            pj = particles[j]
            dx = pi.pos.x - pj.pos.x
            dy = pi.pos.y - pj.pos.y
            min_dist = pi.radius + pj.radius
            if dx * dx + dy * dy < min_dist * min_dist:
                yield i, j


def resolve_pair(p1: Particle, p2: Particle) -> bool:
    """
    Separate two overlapping particles.

    Coincident particles have no separation direction and are left in
    place; two immovable particles are skipped.

    Returns:
        True if a correction was applied.
    """
    diff = p1.pos - p2.pos
    dist_sq = diff.length_squared()
    min_dist = p1.radius + p2.radius
    if dist_sq >= min_dist * min_dist:
        return False

    total_inv_mass = p1.inv_mass + p2.inv_mass
    if total_inv_mass < EPSILON:
        return False

    dist = math.sqrt(dist_sq)
    correction = diff.normalize() * ((min_dist - dist) / total_inv_mass)
    p1.pos = p1.pos + correction * p1.inv_mass
    p2.pos = p2.pos - correction * p2.inv_mass
    return True


def solve_particle_collisions(particles: list[Particle]) -> int:
    """
    Run one all-pairs collision pass over the particle store.

    Returns:
        Number of pairs that received a correction.
    """
    n = len(particles)
    resolved = 0
    for i in range(n):
        p1 = particles[i]
        for j in range(i + 1, n):
            if resolve_pair(p1, particles[j]):
                resolved += 1
    return resolved
