# MIT License (see LICENSE)
"""
softbody_sim - A 2D position-based soft body simulation engine.

Bodies are grids of point masses held together by distance constraints
(springs) and an optional shape matching constraint. Each step integrates
positions, relaxes the constraints and particle collisions with a fixed
number of Gauss-Seidel sweeps, then rebuilds velocities.

Main entry points:
    - Simulation: owns the particle store, the bodies and the config.
    - SimulationConfig: gravity, damping, solver iterations, bounds.
    - SoftBodyConfig: grid layout and stiffness of one body.
    - Vec2, Mat2, Particle: value and state types.

Submodules:
    - constraints: Spring and ShapeMatchingConstraint.
    - collision: particle/particle separation and bounds clamping.
    - core: integrators and diagnostic invariants.
    - profiler: optional per-phase timing.

Example:
    from softbody_sim import Simulation, SimulationConfig, SoftBodyConfig

    sim = Simulation(SimulationConfig(gravity=(0, 980), solver_iterations=8))
    sim.add_soft_body(SoftBodyConfig(center=(300, 100), rows=5, cols=5))
    for _ in range(100):
        sim.step(1 / 60)
    print(sim.positions())
"""
from .simulation import Simulation
from .config import SimulationConfig, SoftBodyConfig
from .body import SoftBody
from .constraints import Spring, ShapeMatchingConstraint
from .types import Vec2, Mat2, Particle
from .errors import ConfigError
from .constants import EPSILON

__version__ = "0.1.0"

__all__ = [
    # Simulation
    "Simulation",
    "SimulationConfig",
    "SoftBodyConfig",
    "SoftBody",
    # Constraints
    "Spring",
    "ShapeMatchingConstraint",
    # Types
    "Vec2",
    "Mat2",
    "Particle",
    # Errors / tolerances
    "ConfigError",
    "EPSILON",
]
