# examples/anchored_bodies.py
# A soft body dropped onto a pinned ledge, plus a spring-only body.
import logging

from softbody_sim import Simulation, SimulationConfig, SoftBodyConfig
from softbody_sim.core import kinetic_energy

logging.basicConfig(level=logging.DEBUG)

W, H = 800.0, 600.0
sim = Simulation(SimulationConfig(
    gravity=(0.0, 600.0),
    bounds=((0.0, 0.0), (W, H)),
))

sim.add_soft_body(SoftBodyConfig(
    center=(W * 0.5, H * 0.25), size=(120.0, 120.0), rows=8, cols=8,
    stiffness=0.25, shape_stiffness=0.3,
))
sim.add_soft_body(SoftBodyConfig(
    center=(W * 0.5, H * 0.8), size=(W * 0.6, 60.0), rows=4, cols=20,
    stiffness=0.3, shape_stiffness=0.4,
))
sim.add_soft_body(SoftBodyConfig(
    center=(W * 0.8, H * 0.2), size=(50.0, 50.0), rows=3, cols=3,
    stiffness=0.8, shape_stiffness=0.0, is_fixed=True,
))

for frame in range(240):
    sim.step(1 / 60)
    if frame % 60 == 0:
        print(f"frame {frame:3d}  KE={kinetic_energy(sim.particles):12.1f}")
