# MIT License (see LICENSE)
"""
Axis-aligned containment of particles inside a rectangle.
"""
from __future__ import annotations

from ..types import Particle, Vec2


def clamp_particle(p: Particle, lo: Vec2, hi: Vec2) -> None:
    """
    Clamp a particle center into [lo + radius, hi - radius] per axis.

    When the rectangle is narrower than the particle, the upper bound wins.
    """
    r = p.radius
    x = min(max(p.pos.x, lo.x + r), hi.x - r)
    y = min(max(p.pos.y, lo.y + r), hi.y - r)
    if x != p.pos.x or y != p.pos.y:
        p.pos = Vec2(x, y)


def apply_bounds(particles: list[Particle], bounds: tuple[Vec2, Vec2] | None) -> None:
    """Clamp every particle (fixed ones included) into bounds, if set."""
    if bounds is None:
        return
    lo, hi = bounds
    for p in particles:
        clamp_particle(p, lo, hi)
