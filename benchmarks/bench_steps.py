"""
Microbenchmark: time per step vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from softbody_sim import Simulation, SimulationConfig, SoftBodyConfig
from softbody_sim.collision import overlapping_pairs
from softbody_sim.profiler import Profiler

def run(side: int, bodies: int = 2, steps: int = 120):
    prof = Profiler()
    sim = Simulation(
        SimulationConfig(
            gravity=(0.0, 600.0),
            solver_iterations=8,
            bounds=((0.0, 0.0), (1200.0, 800.0)),
        ),
        profiler=prof,
    )

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    for k in range(bodies):
        cx = 200.0 + 800.0 * k / max(1, bodies - 1) + 5.0 * float(rng.normal())
        sim.add_soft_body(SoftBodyConfig(
            center=(cx, 200.0),
            size=(20.0 * side, 20.0 * side),
            rows=side,
            cols=side,
            stiffness=0.3,
            shape_stiffness=0.2,
        ))

    # warmup
    for _ in range(10):
        sim.step(1 / 60)
    prof.stats.clear()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step(1 / 60)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    # contacts the last relaxation pass left unresolved
    overlaps = sum(1 for _ in overlapping_pairs(sim.particles))
    return len(sim.particles), per_step, overlaps, prof.stats.summary()

if __name__ == "__main__":
    for side in [3, 5, 8, 10]:
        n, per_step, overlaps, summary = run(side)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}  overlaps={overlaps}")
        for k in ["integrate", "constraints", "collisions", "bounds", "velocities"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
