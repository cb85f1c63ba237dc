# examples/falling_box.py
from softbody_sim import Simulation, SimulationConfig, SoftBodyConfig

sim = Simulation(SimulationConfig(
    gravity=(0.0, 980.0),
    solver_iterations=8,
    bounds=((0.0, 0.0), (800.0, 600.0)),
))

sim.add_soft_body(SoftBodyConfig(
    center=(400.0, 150.0),
    size=(120.0, 120.0),
    rows=8,
    cols=8,
    stiffness=0.25,
    shape_stiffness=0.3,
))

for _ in range(180):
    sim.step(1 / 60)

pos = sim.positions()
print("particles:", len(sim.particles))
print("lowest y:", pos[:, 1].max())
print("centroid:", pos.mean(axis=0))
