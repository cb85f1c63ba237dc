import pytest

from softbody_sim.types import Particle


@pytest.fixture
def make_particles():
    """Build a free particle store from a list of (x, y) positions."""
    def _make(points, inv_mass=1.0, radius=1.0):
        out = []
        for x, y in points:
            p = Particle.at(x, y)
            p.inv_mass = inv_mass
            p.radius = radius
            out.append(p)
        return out
    return _make
