# MIT License (see LICENSE)
"""
Diagnostic quantities for checking simulation behaviour.

PBD does not conserve energy exactly (damping and position projection
both remove energy), so these are used to observe trends such as a body
settling, or to verify constraint accuracy as solver_iterations grow.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..types import Particle

if TYPE_CHECKING:
    from ..simulation import Simulation


def kinetic_energy(particles: list[Particle]) -> float:
    """
    Total kinetic energy T = Σ ½ m v² of the movable particles.
    """
    ke = 0.0
    for p in particles:
        m = p.mass
        if m <= 0.0:
            continue
        ke += 0.5 * m * p.vel.length_squared()
    return ke


def linear_momentum(particles: list[Particle]) -> np.ndarray:
    """
    Total linear momentum P = Σ m v as a float64 vector [Px, Py].
    """
    out = np.zeros(2, dtype=np.float64)
    for p in particles:
        m = p.mass
        if m <= 0.0:
            continue
        out += m * p.vel.to_array()
    return out


def max_spring_error(sim: Simulation) -> float:
    """
    Largest |current length - rest length| over every spring.

    Returns 0 when the simulation has no springs.
    """
    worst = 0.0
    for body in sim.soft_bodies:
        for s in body.springs:
            worst = max(worst, abs(s.error(sim.particles)))
    return worst
