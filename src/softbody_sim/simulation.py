# MIT License (see LICENSE)
"""
The simulation container and its step pipeline.

The Simulation owns the single particle store, the soft bodies built on
top of it and the global configuration. Each call to step(dt) runs three
phases in a fixed order:

    1. Integration: gravity and explicit position update of free particles.
    2. Relaxation, repeated config.solver_iterations times:
         - for each body (insertion order): springs in order, then the
           shape constraint
         - one global all-pairs collision pass
         - boundary clamp
    3. Velocity reconstruction from the position delta, with damping.

The ordering is a deterministic Gauss-Seidel sweep; two simulations built
and stepped identically produce identical state.

Structure:
    - User creates a Simulation with a SimulationConfig.
    - User adds bodies via add_soft_body().
    - User calls sim.step(dt) in a loop and reads sim.particles.
"""
from __future__ import annotations
from contextlib import nullcontext
import logging

import numpy as np

from .body import SoftBody, build_soft_body
from .collision import apply_bounds, solve_particle_collisions
from .config import SimulationConfig, SoftBodyConfig
from .core.integrators import predict_positions, update_velocities
from .profiler import Profiler
from .types import Particle
from .util import positions_array

logger = logging.getLogger(__name__)


class Simulation:
    """
    Position-based soft body world.

    Attributes:
        particles: Shared particle store. Renderers and input handlers may
            overwrite pos, prev_pos and vel of any particle between steps.
        soft_bodies: Bodies in insertion order (read-only view).
        config: Global parameters; mutable between steps.
        profiler: Optional Profiler timing the phases of each step.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        profiler: Profiler | None = None,
        validate: bool = False,
    ) -> None:
        self.particles: list[Particle] = []
        self._soft_bodies: list[SoftBody] = []
        self._config = config if config is not None else SimulationConfig()
        self.profiler = profiler
        if validate:
            self._config.validate()
        logger.debug("simulation created with %s", self._config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def soft_bodies(self) -> tuple[SoftBody, ...]:
        return tuple(self._soft_bodies)

    @property
    def config(self) -> SimulationConfig:
        """The live configuration. Mutating it affects the next step."""
        return self._config

    @config.setter
    def config(self, value: SimulationConfig) -> None:
        self._config = value

    def positions(self) -> np.ndarray:
        """(N, 2) float64 snapshot of particle positions, for drawing."""
        return positions_array(self.particles)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_soft_body(self, config: SoftBodyConfig, validate: bool = False) -> None:
        """
        Create a grid soft body and add its particles to the store.

        Args:
            config: Body description.
            validate: Check config ranges first and raise ConfigError on
                bad input. Without it, degenerate configs (e.g. rows=0)
                produce degenerate but well-defined bodies.
        """
        if validate:
            config.validate()
        body = build_soft_body(config, self.particles)
        self._soft_bodies.append(body)
        logger.debug(
            "added soft body #%d; store now holds %d particles",
            len(self._soft_bodies) - 1, len(self.particles),
        )

    # ------------------------------------------------------------------
    # Step pipeline
    # ------------------------------------------------------------------

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def _solve_constraints(self) -> None:
        for body in self._soft_bodies:
            body.solve(self.particles)

    def step(self, dt: float) -> None:
        """
        Advance the simulation by dt seconds.

        Raises:
            ValueError: If dt is not positive.
        """
        dt = float(dt)
        if not dt > 0.0:
            raise ValueError(f"dt must be positive, got {dt}")

        with self._section("integrate"):
            predict_positions(self.particles, self._config.gravity, dt)

        for _ in range(self._config.solver_iterations):
            with self._section("constraints"):
                self._solve_constraints()
            with self._section("collisions"):
                solve_particle_collisions(self.particles)
            with self._section("bounds"):
                apply_bounds(self.particles, self._config.bounds)

        with self._section("velocities"):
            update_velocities(self.particles, dt, self._config.damping)
