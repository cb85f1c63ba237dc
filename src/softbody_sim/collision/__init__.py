# MIT License (see LICENSE)
"""
Collision handling for particles.

This subpackage provides:
    - solve_particle_collisions: one all-pairs disc/disc separation pass.
    - apply_bounds: clamp particles into an axis-aligned rectangle.

Typical usage:
    from softbody_sim.collision import solve_particle_collisions, apply_bounds

    solve_particle_collisions(sim.particles)
    apply_bounds(sim.particles, sim.config.bounds)
"""
from .particles import overlapping_pairs, resolve_pair, solve_particle_collisions
from .bounds import apply_bounds, clamp_particle

__all__ = [
    "overlapping_pairs",
    "resolve_pair",
    "solve_particle_collisions",
    "apply_bounds",
    "clamp_particle",
]
