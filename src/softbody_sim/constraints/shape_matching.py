# MIT License (see LICENSE)
"""
Shape matching constraint (Müller et al. 2005, rigid variant).

The constraint remembers the rest configuration of a particle group as
offsets q_i from its mass-weighted centroid. Each solve:

1. Recomputes the current centroid c.
2. Accumulates Apq = Σ (x_i - c) ⊗ q_i.
3. Extracts the best-fit rotation R = polar(Apq).
4. Pulls every free particle toward its goal g_i = c + R·q_i by
   stiffness * (g_i - x_i).

Pinned particles take part in steps 1-2 (they anchor the fitted frame)
but are never moved in step 4.
"""
from __future__ import annotations
from dataclasses import dataclass

from ..constants import EPSILON
from ..types import Mat2, Particle, Vec2


def mass_weighted_centroid(indices: list[int], particles: list[Particle]) -> tuple[Vec2, float]:
    """
    Centroid of the indexed particles weighted by mass.

    Immovable particles have zero mass here and do not shift the centroid.

    Returns:
        (centroid, total_mass). The centroid is meaningless when
        total_mass is not above EPSILON.
    """
    cx = 0.0
    cy = 0.0
    total_mass = 0.0
    for i in indices:
        p = particles[i]
        m = 1.0 / p.inv_mass if p.inv_mass > EPSILON else 0.0
        cx += p.pos.x * m
        cy += p.pos.y * m
        total_mass += m
    if total_mass > EPSILON:
        inv = 1.0 / total_mass
        return Vec2(cx * inv, cy * inv), total_mass
    return Vec2(0.0, 0.0), total_mass


@dataclass
class ShapeMatchingConstraint:
    """
    Rigid shape preservation over a group of particles.

    Attributes:
        particle_indices: Indices of the group, in a fixed order.
        stiffness: Fraction of the goal offset applied per solve (0-1).
        initial_shape: Rest offsets from the initial centroid, aligned
            with particle_indices. Never modified after construction.
        center_of_mass: Centroid from the last solve. Kept unchanged when
            the group has no mass.
    """
    particle_indices: list[int]
    stiffness: float
    initial_shape: tuple[Vec2, ...]
    center_of_mass: Vec2

    @classmethod
    def create(cls, particle_indices: list[int], stiffness: float, particles: list[Particle]) -> ShapeMatchingConstraint:
        """Capture the rest shape from the particles' current positions."""
        indices = list(particle_indices)
        center, _ = mass_weighted_centroid(indices, particles)
        shape = tuple(particles[i].pos - center for i in indices)
        return cls(indices, stiffness, shape, center)

    def update_center_of_mass(self, particles: list[Particle]) -> Vec2:
        center, total_mass = mass_weighted_centroid(self.particle_indices, particles)
        if total_mass > EPSILON:
            self.center_of_mass = center
        return self.center_of_mass

    def covariance(self, particles: list[Particle]) -> Mat2:
        """Apq = Σ (x_i - c) ⊗ q_i around the cached centroid."""
        c = self.center_of_mass
        a00 = a10 = a01 = a11 = 0.0
        for idx, q in zip(self.particle_indices, self.initial_shape):
            pos = particles[idx].pos
            px = pos.x - c.x
            py = pos.y - c.y
            a00 += px * q.x
            a10 += py * q.x
            a01 += px * q.y
            a11 += py * q.y
        return Mat2(Vec2(a00, a10), Vec2(a01, a11))

    def goal_positions(self, particles: list[Particle]) -> list[Vec2]:
        """Goal positions for the current state, without moving anything."""
        self.update_center_of_mass(particles)
        r = self.covariance(particles).polar_decomposition()
        return [self.center_of_mass + r @ q for q in self.initial_shape]

    def solve(self, particles: list[Particle]) -> None:
        goals = self.goal_positions(particles)
        for idx, goal in zip(self.particle_indices, goals):
            p = particles[idx]
            if p.is_fixed:
                continue
            p.pos = p.pos + (goal - p.pos) * self.stiffness
