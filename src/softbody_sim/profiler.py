# MIT License (see LICENSE)
"""
Lightweight per-phase timing for Simulation.step().

When a Profiler is handed to a Simulation, each step records the time
spent in its phases ("integrate", "constraints", "collisions", "bounds",
"velocities").

Example:
    profiler = Profiler()
    sim = Simulation(config, profiler=profiler)
    for _ in range(100):
        sim.step(1 / 60)
    print(profiler.stats.summary()["collisions"]["mean_ms"])
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
import time
from typing import Iterator


@dataclass
class ProfileStats:
    """
    Wall-clock samples per step phase, in seconds.

    One sample is stored per timed block, so the relaxation phases
    ("constraints", "collisions", "bounds") collect solver_iterations
    samples per step while "integrate" and "velocities" collect one.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, seconds: float) -> None:
        self.samples.setdefault(name, []).append(seconds)

    def clear(self) -> None:
        """Drop all samples, e.g. after a warmup run."""
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-phase totals in milliseconds.

        Returns:
            {phase: {"n", "mean_ms", "max_ms", "total_ms"}} for every phase
            with at least one sample.
        """
        report = {}
        for name, seconds in self.samples.items():
            total_ms = 1e3 * sum(seconds)
            report[name] = {
                "n": len(seconds),
                "mean_ms": total_ms / len(seconds),
                "max_ms": 1e3 * max(seconds),
                "total_ms": total_ms,
            }
        return report


class Profiler:
    """
    Context-manager based section timer.

    Usage:
        profiler = Profiler()
        with profiler.section("collisions"):
            solve_particle_collisions(particles)
    """

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
