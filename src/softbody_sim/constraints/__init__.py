# MIT License (see LICENSE)
"""
Position-based constraints.

This subpackage provides:
    - Spring: distance constraint between two particle indices.
    - ShapeMatchingConstraint: rigid shape preservation of a particle group.

Typical usage:
    from softbody_sim.constraints import Spring

    spring = Spring.create(0, 1, stiffness=0.5, particles=particles)
    spring.solve(particles)
"""
from .spring import Spring, solve_springs
from .shape_matching import ShapeMatchingConstraint, mass_weighted_centroid

__all__ = [
    "Spring",
    "solve_springs",
    "ShapeMatchingConstraint",
    "mass_weighted_centroid",
]
