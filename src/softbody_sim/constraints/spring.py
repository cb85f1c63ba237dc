# MIT License (see LICENSE)
"""
Distance constraint between two particles.

A spring is one Gauss-Seidel projection per solve() call: it moves both
endpoints toward the rest length in proportion to their inverse masses,
scaled by the stiffness. A single call does not reach the rest length;
convergence comes from repeated calls across solver iterations.

Springs hold particle indices, never Particle objects, so that many
constraints can share the same particle store.
"""
from __future__ import annotations
from dataclasses import dataclass

from ..constants import EPSILON
from ..types import Particle
from ..util import particle_pair


@dataclass
class Spring:
    """
    Pairwise distance constraint.

    Attributes:
        p1_index: Index of the first particle.
        p2_index: Index of the second particle.
        rest_length: Target distance, captured once at construction.
        stiffness: Fraction of the error corrected per solve (0-1).
    """
    p1_index: int
    p2_index: int
    rest_length: float
    stiffness: float

    @classmethod
    def create(cls, p1_index: int, p2_index: int, stiffness: float, particles: list[Particle]) -> Spring:
        """Build a spring whose rest length is the current particle distance."""
        rest_length = (particles[p1_index].pos - particles[p2_index].pos).length()
        return cls(p1_index, p2_index, rest_length, stiffness)

    def current_length(self, particles: list[Particle]) -> float:
        return (particles[self.p1_index].pos - particles[self.p2_index].pos).length()

    def error(self, particles: list[Particle]) -> float:
        """Signed stretch: positive when longer than the rest length."""
        return self.current_length(particles) - self.rest_length

    def solve(self, particles: list[Particle]) -> None:
        """
        Project both endpoints toward the rest length.

        Skips the pair when both particles are immovable or when they
        coincide (the correction direction is undefined).
        """
        p1, p2 = particle_pair(particles, self.p1_index, self.p2_index)

        total_inv_mass = p1.inv_mass + p2.inv_mass
        if total_inv_mass < EPSILON:
            return

        diff = p1.pos - p2.pos
        dist = diff.length()
        if dist < EPSILON:
            return

        correction = diff * ((dist - self.rest_length) / dist) * (self.stiffness / total_inv_mass)
        p1.pos = p1.pos - correction * p1.inv_mass
        p2.pos = p2.pos + correction * p2.inv_mass


def solve_springs(springs: list[Spring], particles: list[Particle]) -> None:
    """Solve each spring once, in list order."""
    for s in springs:
        s.solve(particles)
