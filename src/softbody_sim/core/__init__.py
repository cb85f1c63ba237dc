# MIT License (see LICENSE)
"""
Integration and diagnostics for the particle store.

This subpackage provides:
    - Integrators: predict_positions / update_velocities around the
      constraint solve.
    - Invariants: kinetic energy, momentum and spring error diagnostics.

Typical usage:
    from softbody_sim.core import kinetic_energy

    print(kinetic_energy(sim.particles))
"""
from .integrators import predict_positions, update_velocities
from .invariants import kinetic_energy, linear_momentum, max_spring_error

__all__ = [
    # Integrators
    "predict_positions",
    "update_velocities",
    # Diagnostics
    "kinetic_energy",
    "linear_momentum",
    "max_spring_error",
]
