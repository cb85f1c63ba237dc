# MIT License (see LICENSE)
"""
Position-based time integration for particles.

A PBD step brackets the constraint solve with two integration halves:

    predict:   v ← v + g·dt
               x_prev ← x
               x ← x + v·dt
    (constraints move x)
    finalize:  v ← (x - x_prev)/dt · damping

Deriving the velocity from the corrected positions (Verlet style) makes
every constraint correction show up as a velocity change without ever
computing a force.

Reference:
    Müller et al., "Position Based Dynamics", 2007, Algorithm 1.
"""
from __future__ import annotations

from ..types import Particle, Vec2


def predict_positions(particles: list[Particle], gravity: Vec2, dt: float) -> None:
    """
    Apply gravity and advance positions explicitly.

    Pinned particles are left untouched, including their prev_pos.
    """
    for p in particles:
        if p.is_fixed:
            continue
        p.vel = p.vel + gravity * dt
        p.prev_pos = p.pos
        p.pos = p.pos + p.vel * dt


def update_velocities(particles: list[Particle], dt: float, damping: float) -> None:
    """
    Rebuild velocities from the position change of this step.

    Pinned particles always end the step at rest.
    """
    inv_dt = 1.0 / dt
    for p in particles:
        if p.is_fixed:
            p.vel = Vec2.zero()
            continue
        p.vel = (p.pos - p.prev_pos) * inv_dt * damping
