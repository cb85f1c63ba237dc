# MIT License (see LICENSE)
"""
Core type definitions for the 2D soft body simulation.

Defines the fundamental data structures:
- Vec2: immutable 2D vector value type.
- Mat2: immutable 2x2 matrix stored as two column vectors.
- Particle: point mass state advanced by the simulation.

Particles are only ever referenced by their index in the Simulation's
particle list; constraints never hold a Particle object between calls.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Iterator

import numpy as np

from .constants import EPSILON, DEFAULT_INV_MASS, DEFAULT_PARTICLE_RADIUS, POLAR_TIE_RTOL


# =============================================================================
# Vector / Matrix primitives
# =============================================================================

@dataclass(frozen=True)
class Vec2:
    """
    2D vector value type.

    Attributes:
        x: Horizontal component.
        y: Vertical component (screen space, +y points down).
    """
    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def zero() -> Vec2:
        return Vec2(0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        """
        2D cross product (scalar result): a × b = ax*by - ay*bx.

        Positive result means `other` is counterclockwise from `self`
        in a y-up frame.
        """
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        """Squared magnitude. Avoids sqrt for distance comparisons."""
        return self.x * self.x + self.y * self.y

    def normalize(self) -> Vec2:
        """
        Unit vector in the same direction.

        Returns the zero vector if the length is not above EPSILON.
        """
        n = self.length()
        if n > EPSILON:
            return self / n
        return Vec2(0.0, 0.0)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)


@dataclass(frozen=True)
class Mat2:
    """
    2x2 matrix stored column-major.

    Attributes:
        c1: First column.
        c2: Second column.
    """
    c1: Vec2 = field(default_factory=Vec2)
    c2: Vec2 = field(default_factory=Vec2)

    @staticmethod
    def zero() -> Mat2:
        return Mat2(Vec2(0.0, 0.0), Vec2(0.0, 0.0))

    @staticmethod
    def identity() -> Mat2:
        return Mat2(Vec2(1.0, 0.0), Vec2(0.0, 1.0))

    @staticmethod
    def outer(a: Vec2, b: Vec2) -> Mat2:
        """Outer product a ⊗ b, i.e. the matrix a·bᵀ."""
        return Mat2(Vec2(a.x * b.x, a.y * b.x), Vec2(a.x * b.y, a.y * b.y))

    def __add__(self, other: Mat2) -> Mat2:
        return Mat2(self.c1 + other.c1, self.c2 + other.c2)

    def __mul__(self, scalar: float) -> Mat2:
        return Mat2(self.c1 * scalar, self.c2 * scalar)

    def __rmul__(self, scalar: float) -> Mat2:
        return self.__mul__(scalar)

    def __matmul__(self, v: Vec2) -> Vec2:
        return self.mul_vec(v)

    def mul_vec(self, v: Vec2) -> Vec2:
        """Matrix-vector product M·v."""
        return Vec2(
            self.c1.x * v.x + self.c2.x * v.y,
            self.c1.y * v.x + self.c2.y * v.y,
        )

    def transpose(self) -> Mat2:
        return Mat2(Vec2(self.c1.x, self.c2.x), Vec2(self.c1.y, self.c2.y))

    def determinant(self) -> float:
        return self.c1.x * self.c2.y - self.c2.x * self.c1.y

    def to_array(self) -> np.ndarray:
        """Row-major numpy view [[m00, m01], [m10, m11]]."""
        return np.array(
            [[self.c1.x, self.c2.x], [self.c1.y, self.c2.y]], dtype=np.float64
        )

    def polar_decomposition(self) -> Mat2:
        """
        Extract the rotation factor R of A = R·S (closed form, 2x2 only).

        With A = [[a, b], [c, d]] the two candidate directions are

            x = (a + d, c - b)    best-fit rotation angle
            y = (a - d, c + b)    best-fit reflection axis

        and |x|² - |y|² = 4·det(A). The longer one is normalised into the
        columns of R, which keeps the result well defined when A collapses
        along one of the two branches. Ties go to x: a rank-1 A = u·vᵀ,
        as built from a collinear particle group, has |x| == |y| and only
        x carries the fitting angle angle(u) - angle(v). Both branches
        emit a proper rotation (det R = +1). A zero matrix yields the
        identity.
        """
        a, c = self.c1.x, self.c1.y
        b, d = self.c2.x, self.c2.y
        x = Vec2(a + d, c - b)
        y = Vec2(a - d, c + b)
        len_x = x.length()
        len_y = y.length()

        if len_x > EPSILON and len_x >= len_y * (1.0 - POLAR_TIE_RTOL):
            inv = 1.0 / len_x
            return Mat2(Vec2(x.x * inv, x.y * inv), Vec2(-x.y * inv, x.x * inv))
        if len_y > EPSILON:
            inv = 1.0 / len_y
            return Mat2(Vec2(y.x * inv, y.y * inv), Vec2(-y.y * inv, y.x * inv))
        return Mat2.identity()


# =============================================================================
# Particle
# =============================================================================

@dataclass
class Particle:
    """
    A point mass advanced by the simulation.

    Attributes:
        pos: Current position.
        prev_pos: Position at the start of the current step (Verlet history).
        vel: Velocity, rebuilt from the position delta after each step.
        inv_mass: 1/mass. 0 means immovable.
        radius: Collision radius.
        is_fixed: Pinned particle. Always paired with inv_mass == 0.

    Note:
        Renderers and input handlers may overwrite pos, prev_pos and vel
        between steps; the next step simply continues from that state.
    """
    pos: Vec2 = field(default_factory=Vec2)
    prev_pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    inv_mass: float = DEFAULT_INV_MASS
    radius: float = DEFAULT_PARTICLE_RADIUS
    is_fixed: bool = False

    @classmethod
    def at(cls, x: float, y: float) -> Particle:
        """Free particle at rest at (x, y) with default mass and radius."""
        p = Vec2(float(x), float(y))
        return cls(pos=p, prev_pos=p, vel=Vec2(0.0, 0.0))

    @property
    def mass(self) -> float:
        """Mass (1/inv_mass). Returns 0 for immovable particles."""
        return 1.0 / self.inv_mass if self.inv_mass > EPSILON else 0.0

    def pin(self) -> None:
        """Make the particle immovable."""
        self.is_fixed = True
        self.inv_mass = 0.0
        self.vel = Vec2(0.0, 0.0)
