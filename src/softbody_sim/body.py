# MIT License (see LICENSE)
"""
Soft body aggregate and its grid construction.

A SoftBody owns no particle data: it lists indices into the simulation's
particle store together with its springs and optional shape constraint.
Bodies are built once and never structurally modified.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .config import SoftBodyConfig
from .constraints import Spring, ShapeMatchingConstraint, solve_springs
from .types import Particle

logger = logging.getLogger(__name__)


@dataclass
class SoftBody:
    """
    Attributes:
        particle_indices: Indices of this body's particles, row-major.
        springs: Distance constraints, solved in list order.
        shape_constraint: Shape matching over all particles, or None.
    """
    particle_indices: list[int] = field(default_factory=list)
    springs: list[Spring] = field(default_factory=list)
    shape_constraint: ShapeMatchingConstraint | None = None

    def solve(self, particles: list[Particle]) -> None:
        """One relaxation pass: every spring, then the shape constraint."""
        solve_springs(self.springs, particles)
        if self.shape_constraint is not None:
            self.shape_constraint.solve(particles)


def grid_positions(config: SoftBodyConfig) -> list[tuple[float, float]]:
    """
    Row-major particle centers for a config.

    Spacing is size/(count - 1) per axis, or 0 when that axis holds a
    single particle.
    """
    spacing_x = config.size.x / (config.cols - 1) if config.cols > 1 else 0.0
    spacing_y = config.size.y / (config.rows - 1) if config.rows > 1 else 0.0
    left = config.center.x - config.size.x * 0.5
    top = config.center.y - config.size.y * 0.5
    return [
        (left + j * spacing_x, top + i * spacing_y)
        for i in range(config.rows)
        for j in range(config.cols)
    ]


def build_soft_body(config: SoftBodyConfig, particles: list[Particle]) -> SoftBody:
    """
    Append a grid body's particles to the store and build its constraints.

    Springs connect each particle to its right neighbour and then to its
    bottom neighbour (4-connected, no diagonals) when stiffness > 0. A
    single shape constraint covers the whole body when shape_stiffness > 0.

    Args:
        config: Body description. Not validated here.
        particles: Shared particle store; extended in place.

    Returns:
        The new SoftBody referencing the appended particles.
    """
    start = len(particles)
    indices: list[int] = []

    for x, y in grid_positions(config):
        p = Particle.at(x, y)
        p.radius = config.particle_radius
        if config.is_fixed:
            p.pin()
        else:
            p.inv_mass = config.particle_inv_mass
        indices.append(len(particles))
        particles.append(p)

    springs: list[Spring] = []
    if config.stiffness > 0.0:
        rows, cols = config.rows, config.cols
        for i in range(rows):
            for j in range(cols):
                idx = start + i * cols + j
                if j < cols - 1:
                    springs.append(Spring.create(idx, idx + 1, config.stiffness, particles))
                if i < rows - 1:
                    springs.append(Spring.create(idx, idx + cols, config.stiffness, particles))

    shape = None
    if config.shape_stiffness > 0.0:
        shape = ShapeMatchingConstraint.create(indices, config.shape_stiffness, particles)

    logger.debug(
        "built soft body: %d particles (from index %d), %d springs, shape matching %s",
        len(indices), start, len(springs), "on" if shape is not None else "off",
    )
    return SoftBody(particle_indices=indices, springs=springs, shape_constraint=shape)
