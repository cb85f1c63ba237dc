# MIT License (see LICENSE)
"""
Conversion helpers between user-facing inputs and engine types.

Configs and tests may pass plain tuples, lists, numpy arrays or Vec2
instances wherever a vector is expected; these helpers normalise them.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from .types import Vec2, Particle


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used for snapshots handed to renderers and diagnostics so that
    callers always get consistent double precision data.
    """
    return np.array(x, dtype=np.float64)


def as_vec2(v) -> Vec2:
    """
    Coerce a Vec2, a length-2 sequence or a shape (2,) array into a Vec2.

    Raises:
        ValueError: If the input does not hold exactly two components.
    """
    if isinstance(v, Vec2):
        return v
    arr = f64(v).reshape(-1)
    if arr.shape != (2,):
        raise ValueError(f"Expected a 2D vector, got shape {arr.shape}")
    return Vec2(float(arr[0]), float(arr[1]))


def positions_array(particles: Iterable[Particle]) -> np.ndarray:
    """Stack particle positions into an (N, 2) float64 array."""
    data = [tuple(p.pos) for p in particles]
    if not data:
        return np.zeros((0, 2), dtype=np.float64)
    return f64(data)


def particle_pair(particles: list[Particle], i: int, j: int) -> tuple[Particle, Particle]:
    """
    Fetch two distinct particles from the shared store.

    Solvers mutate both returned particles within one call, so the two
    indices must never refer to the same slot.

    Raises:
        IndexError: If ``i == j`` or either index is out of range.
    """
    if i == j:
        raise IndexError(f"Particle pair indices must differ (got {i} twice)")
    return particles[i], particles[j]
