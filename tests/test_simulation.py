import numpy as np
import pytest

from softbody_sim import (
    Simulation,
    SimulationConfig,
    SoftBodyConfig,
    Vec2,
)
from softbody_sim.core import kinetic_energy, linear_momentum, max_spring_error
from softbody_sim.profiler import Profiler

DT = 1 / 60


def pair_config(**kw):
    """Two particles joined by one stiff spring, no shape matching."""
    base = dict(
        center=(100.0, 100.0),
        size=(10.0, 50.0),
        rows=2,
        cols=1,
        stiffness=1.0,
        shape_stiffness=0.0,
    )
    base.update(kw)
    return SoftBodyConfig(**base)


def test_defaults():
    sim = Simulation()
    assert sim.config.gravity == Vec2(0.0, 270.0)
    assert sim.config.damping == 0.99
    assert sim.config.solver_iterations == 8
    assert sim.config.bounds is None
    assert sim.particles == []
    assert sim.soft_bodies == ()


def test_falling_pair_end_to_end():
    """
    Under gravity (0, 980) the lower particle moves down on the first step
    and the spring stays at its rest length while the pair falls.
    """
    sim = Simulation(SimulationConfig(gravity=(0.0, 980.0)))
    sim.add_soft_body(pair_config())
    upper, lower = sim.particles
    assert lower.pos.y > upper.pos.y
    y0 = lower.pos.y
    spring = sim.soft_bodies[0].springs[0]
    assert spring.rest_length == pytest.approx(50.0)

    sim.step(DT)
    assert lower.pos.y > y0

    for _ in range(120):
        sim.step(DT)
    assert abs(spring.error(sim.particles)) < 1e-6


def test_stretched_pair_relaxes_to_rest_length():
    sim = Simulation(SimulationConfig(gravity=(0.0, 0.0)))
    sim.add_soft_body(pair_config(stiffness=0.2))
    spring = sim.soft_bodies[0].springs[0]
    lower = sim.particles[1]
    lower.pos = lower.pos + Vec2(0.0, 30.0)
    lower.prev_pos = lower.pos

    errors = []
    for _ in range(200):
        sim.step(DT)
        errors.append(abs(spring.error(sim.particles)))
    assert errors[-1] < errors[0]
    assert errors[-1] < 0.5


def test_pair_lands_on_floor():
    W, H = 200.0, 300.0
    cfg = SimulationConfig(gravity=(0.0, 980.0), bounds=((0.0, 0.0), (W, H)))
    sim = Simulation(cfg)
    sim.add_soft_body(pair_config(size=(50.0, 10.0), rows=1, cols=2))

    for _ in range(100):
        sim.step(DT)

    for p in sim.particles:
        assert p.pos.y == pytest.approx(H - p.radius)


def test_fixed_particles_never_move():
    sim = Simulation(SimulationConfig(gravity=(0.0, 980.0), solver_iterations=6))
    sim.add_soft_body(SoftBodyConfig(
        center=(100.0, 200.0), size=(200.0, 20.0), rows=2, cols=8,
        stiffness=0.5, shape_stiffness=0.5, is_fixed=True,
    ))
    sim.add_soft_body(SoftBodyConfig(
        center=(100.0, 120.0), size=(40.0, 40.0), rows=3, cols=3,
        stiffness=0.4, shape_stiffness=0.3,
    ))
    fixed = [p for p in sim.particles if p.is_fixed]
    start = [p.pos for p in fixed]
    assert len(fixed) == 16

    for _ in range(120):
        sim.step(DT)
        for p, s in zip(fixed, start):
            assert p.pos == s
            assert p.inv_mass == 0.0
            assert p.vel == Vec2(0.0, 0.0)

    # The free body came to rest on top of the fixed one instead of passing through
    free = [p for p in sim.particles if not p.is_fixed]
    assert max(p.pos.y for p in free) < 200.0


def test_bounds_hold_after_every_step():
    lo, hi = Vec2(0.0, 0.0), Vec2(160.0, 120.0)
    sim = Simulation(SimulationConfig(gravity=(150.0, 980.0), bounds=(lo, hi)))
    sim.add_soft_body(SoftBodyConfig(
        center=(80.0, 40.0), size=(60.0, 60.0), rows=4, cols=4,
        stiffness=0.3, shape_stiffness=0.2, particle_radius=5.0,
    ))
    for _ in range(150):
        sim.step(DT)
        for p in sim.particles:
            assert lo.x + p.radius <= p.pos.x <= hi.x - p.radius
            assert lo.y + p.radius <= p.pos.y <= hi.y - p.radius


def test_identical_simulations_are_bitwise_identical():
    def run():
        sim = Simulation(SimulationConfig(gravity=(0.0, 600.0), bounds=((0, 0), (400, 300))))
        sim.add_soft_body(SoftBodyConfig(center=(200.0, 60.0), size=(80.0, 80.0), rows=5, cols=5))
        sim.add_soft_body(SoftBodyConfig(center=(210.0, 200.0), size=(200.0, 40.0), rows=3, cols=10))
        for _ in range(60):
            sim.step(DT)
        return sim

    a, b = run(), run()
    assert a.particles == b.particles
    np.testing.assert_array_equal(a.positions(), b.positions())


def test_external_overwrite_is_respected():
    """A drag-style overwrite between steps is picked up as-is."""
    sim = Simulation(SimulationConfig(gravity=(0.0, 0.0), damping=1.0))
    sim.add_soft_body(SoftBodyConfig(rows=1, cols=1))
    p = sim.particles[0]

    p.pos = Vec2(50.0, 50.0)
    p.prev_pos = Vec2(50.0, 50.0)
    p.vel = Vec2(0.0, 0.0)
    sim.step(DT)
    assert p.pos == Vec2(50.0, 50.0)

    p.vel = Vec2(60.0, 0.0)
    sim.step(DT)
    assert p.pos.x == pytest.approx(51.0)
    assert p.vel.x == pytest.approx(60.0)


def test_config_changes_apply_to_next_step():
    sim = Simulation(SimulationConfig(gravity=(0.0, 100.0), damping=1.0))
    sim.add_soft_body(SoftBodyConfig(rows=1, cols=1))
    p = sim.particles[0]

    sim.config.gravity = Vec2(0.0, 0.0)
    sim.step(DT)
    assert p.vel == Vec2(0.0, 0.0)

    sim.config.set_bounds((0.0, 0.0), (20.0, 20.0))
    sim.step(DT)
    assert p.pos == Vec2(p.radius, p.radius)

    sim.config = SimulationConfig(gravity=(0.0, 60.0), damping=1.0)
    y = p.pos.y
    sim.step(DT)
    assert p.pos.y > y


def test_velocity_damping():
    sim = Simulation(SimulationConfig(gravity=(0.0, 0.0), damping=0.5))
    sim.add_soft_body(SoftBodyConfig(rows=1, cols=1))
    p = sim.particles[0]
    p.vel = Vec2(120.0, 0.0)
    sim.step(DT)
    assert p.vel.x == pytest.approx(60.0)


def test_more_iterations_satisfy_springs_better():
    def residual(iterations):
        sim = Simulation(SimulationConfig(gravity=(0.0, 0.0), solver_iterations=iterations))
        sim.add_soft_body(SoftBodyConfig(
            center=(0.0, 0.0), size=(0.0, 180.0), rows=10, cols=1,
            stiffness=0.5, shape_stiffness=0.0,
        ))
        for p in sim.particles:
            p.pos = Vec2(p.pos.x, p.pos.y * 1.5)
            p.prev_pos = p.pos
        sim.step(DT)
        return max_spring_error(sim)

    assert residual(20) < residual(2)


def test_step_rejects_non_positive_dt():
    sim = Simulation()
    with pytest.raises(ValueError):
        sim.step(0.0)
    with pytest.raises(ValueError):
        sim.step(-DT)


def test_profiler_records_phases():
    prof = Profiler()
    sim = Simulation(SimulationConfig(solver_iterations=3), profiler=prof)
    sim.add_soft_body(SoftBodyConfig(rows=3, cols=3))
    for _ in range(4):
        sim.step(DT)
    summary = prof.stats.summary()
    assert summary["integrate"]["n"] == 4
    assert summary["velocities"]["n"] == 4
    assert summary["constraints"]["n"] == 12
    assert summary["collisions"]["n"] == 12
    assert summary["bounds"]["n"] == 12
    assert summary["collisions"]["max_ms"] >= summary["collisions"]["mean_ms"]


def test_positions_snapshot_shape():
    sim = Simulation()
    assert sim.positions().shape == (0, 2)
    sim.add_soft_body(SoftBodyConfig(rows=2, cols=3))
    pos = sim.positions()
    assert pos.shape == (6, 2)
    assert pos.dtype == np.float64
    assert pos[0, 0] == sim.particles[0].pos.x


def test_diagnostics():
    sim = Simulation(SimulationConfig(gravity=(0.0, 0.0), damping=1.0))
    sim.add_soft_body(SoftBodyConfig(rows=1, cols=2, size=(100.0, 0.0), particle_inv_mass=0.5))
    assert max_spring_error(sim) == pytest.approx(0.0)
    for p in sim.particles:
        p.vel = Vec2(3.0, 4.0)
    # m = 2 per particle
    assert kinetic_energy(sim.particles) == pytest.approx(2 * 0.5 * 2.0 * 25.0)
    np.testing.assert_allclose(linear_momentum(sim.particles), [12.0, 16.0])


@pytest.mark.parametrize("rows, cols, size", [
    (3, 1, (0.0, 100.0)),
    (6, 1, (0.0, 250.0)),
    (1, 4, (150.0, 0.0)),
])
def test_resting_line_body_keeps_its_shape(rows, cols, size):
    """A single row or column under shape matching stays put at rest."""
    sim = Simulation(SimulationConfig(gravity=(0.0, 0.0)))
    sim.add_soft_body(SoftBodyConfig(
        center=(0.0, 0.0), size=size, rows=rows, cols=cols,
        stiffness=0.0, shape_stiffness=0.5,
    ))
    start = [p.pos for p in sim.particles]
    for _ in range(20):
        sim.step(DT)
    for p, s in zip(sim.particles, start):
        assert p.pos.x == pytest.approx(s.x, abs=1e-9)
        assert p.pos.y == pytest.approx(s.y, abs=1e-9)


def test_falling_column_keeps_its_order():
    sim = Simulation(SimulationConfig(gravity=(0.0, 600.0)))
    sim.add_soft_body(SoftBodyConfig(
        center=(0.0, 0.0), size=(0.0, 100.0), rows=3, cols=1,
        stiffness=0.2, shape_stiffness=0.5,
    ))
    for _ in range(30):
        sim.step(DT)
    top, mid, bottom = sim.particles
    assert mid.pos.y - top.pos.y == pytest.approx(50.0, rel=1e-6)
    assert bottom.pos.y - mid.pos.y == pytest.approx(50.0, rel=1e-6)
    assert top.pos.x == pytest.approx(0.0, abs=1e-9)


def test_profile_stats_summary_and_clear():
    prof = Profiler()
    prof.stats.add("collisions", 0.002)
    prof.stats.add("collisions", 0.004)
    row = prof.stats.summary()["collisions"]
    assert row["n"] == 2
    assert row["mean_ms"] == pytest.approx(3.0)
    assert row["max_ms"] == pytest.approx(4.0)
    assert row["total_ms"] == pytest.approx(6.0)
    prof.stats.clear()
    assert prof.stats.summary() == {}
