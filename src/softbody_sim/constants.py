# MIT License (see LICENSE)
"""
Numeric tolerances and default parameters used throughout the simulation.

Units are screen-space: positions in pixels, time in seconds, so the
default gravity points down (+y) at a visually pleasing 270 px/s².
"""
from __future__ import annotations

import numpy as np

# Guard for every division in the engine (vector normalisation, spring
# projection, collision push, shape matching). Double precision machine epsilon.
EPSILON: float = float(np.finfo(np.float64).eps)

# SimulationConfig defaults
DEFAULT_GRAVITY: tuple[float, float] = (0.0, 270.0)
DEFAULT_DAMPING: float = 0.99
DEFAULT_SOLVER_ITERATIONS: int = 8

# SoftBodyConfig / Particle defaults
DEFAULT_BODY_SIZE: tuple[float, float] = (100.0, 100.0)
DEFAULT_GRID: int = 5
DEFAULT_STIFFNESS: float = 0.2
DEFAULT_SHAPE_STIFFNESS: float = 0.2
DEFAULT_PARTICLE_RADIUS: float = 8.0
DEFAULT_INV_MASS: float = 1.0

# Relative slack when comparing the two polar decomposition branches. A
# rank-1 matrix (collinear particle group) sits exactly on the tie and must
# resolve to the rotation branch despite rounding.
POLAR_TIE_RTOL: float = 1e-9
