# MIT License (see LICENSE)
"""
Configuration objects for the simulation and for soft body construction.

SimulationConfig is mutable: callers may change gravity, damping or bounds
between steps through Simulation.config. SoftBodyConfig is a frozen
description of one grid body and is only read by add_soft_body().

Both accept tuples, lists or numpy arrays for their vector fields; they
are coerced to Vec2 on construction.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace

from .constants import (
    DEFAULT_GRAVITY,
    DEFAULT_DAMPING,
    DEFAULT_SOLVER_ITERATIONS,
    DEFAULT_BODY_SIZE,
    DEFAULT_GRID,
    DEFAULT_STIFFNESS,
    DEFAULT_SHAPE_STIFFNESS,
    DEFAULT_PARTICLE_RADIUS,
    DEFAULT_INV_MASS,
)
from .errors import ConfigError
from .types import Vec2
from .util import as_vec2


@dataclass
class SimulationConfig:
    """
    Global simulation parameters.

    Attributes:
        gravity: Acceleration applied to every free particle.
        damping: Velocity scale applied after each step, in (0, 1].
        solver_iterations: Relaxation sweeps per step. Accuracy and cost
            both grow linearly with this value.
        bounds: Optional (min, max) corners of the containment rectangle.
    """
    gravity: Vec2 = field(default_factory=lambda: Vec2(*DEFAULT_GRAVITY))
    damping: float = DEFAULT_DAMPING
    solver_iterations: int = DEFAULT_SOLVER_ITERATIONS
    bounds: tuple[Vec2, Vec2] | None = None

    def __post_init__(self) -> None:
        self.gravity = as_vec2(self.gravity)
        if self.bounds is not None:
            lo, hi = self.bounds
            self.bounds = (as_vec2(lo), as_vec2(hi))

    def set_bounds(self, lo, hi) -> None:
        """Enable containment in the rectangle [lo, hi]."""
        self.bounds = (as_vec2(lo), as_vec2(hi))

    def clear_bounds(self) -> None:
        self.bounds = None

    def validate(self) -> SimulationConfig:
        """
        Check parameter ranges.

        Returns:
            self, so calls can be chained.

        Raises:
            ConfigError: On the first out-of-range field.
        """
        if not (0.0 < self.damping <= 1.0):
            raise ConfigError(f"damping must be in (0, 1], got {self.damping}")
        if int(self.solver_iterations) != self.solver_iterations or self.solver_iterations < 1:
            raise ConfigError(
                f"solver_iterations must be a positive integer, got {self.solver_iterations}"
            )
        if self.bounds is not None:
            lo, hi = self.bounds
            if lo.x > hi.x or lo.y > hi.y:
                raise ConfigError(f"bounds min {lo} exceeds max {hi}")
        return self


@dataclass(frozen=True)
class SoftBodyConfig:
    """
    Description of a rectangular grid soft body.

    Attributes:
        center: Center of the grid.
        size: Full width and height covered by the particle centers.
        rows: Particle count along y.
        cols: Particle count along x.
        stiffness: Spring stiffness. 0 disables springs.
        shape_stiffness: Shape matching stiffness. 0 disables the constraint.
        is_fixed: Pin every particle of the body (inv_mass forced to 0).
        particle_radius: Collision radius of every particle.
        particle_inv_mass: Inverse mass of every free particle.
    """
    center: Vec2 = field(default_factory=Vec2)
    size: Vec2 = field(default_factory=lambda: Vec2(*DEFAULT_BODY_SIZE))
    rows: int = DEFAULT_GRID
    cols: int = DEFAULT_GRID
    stiffness: float = DEFAULT_STIFFNESS
    shape_stiffness: float = DEFAULT_SHAPE_STIFFNESS
    is_fixed: bool = False
    particle_radius: float = DEFAULT_PARTICLE_RADIUS
    particle_inv_mass: float = DEFAULT_INV_MASS

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec2(self.center))
        object.__setattr__(self, "size", as_vec2(self.size))

    def replace(self, **changes) -> SoftBodyConfig:
        """Copy of this config with the given fields changed."""
        return replace(self, **changes)

    @property
    def particle_count(self) -> int:
        return self.rows * self.cols

    def validate(self) -> SoftBodyConfig:
        """
        Check parameter ranges.

        Returns:
            self, so calls can be chained.

        Raises:
            ConfigError: On the first out-of-range field.
        """
        if self.rows < 1 or self.cols < 1:
            raise ConfigError(f"rows and cols must be >= 1, got {self.rows}x{self.cols}")
        if self.stiffness < 0.0:
            raise ConfigError(f"stiffness must be >= 0, got {self.stiffness}")
        if self.shape_stiffness < 0.0:
            raise ConfigError(f"shape_stiffness must be >= 0, got {self.shape_stiffness}")
        if self.particle_radius <= 0.0:
            raise ConfigError(f"particle_radius must be > 0, got {self.particle_radius}")
        if self.particle_inv_mass < 0.0:
            raise ConfigError(f"particle_inv_mass must be >= 0, got {self.particle_inv_mass}")
        return self
