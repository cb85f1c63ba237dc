# MIT License (see LICENSE)
"""
Exception types raised by explicit configuration validation.

The solver itself never raises for degenerate geometry; it skips the
offending constraint and continues.
"""
from __future__ import annotations


class ConfigError(ValueError):
    """A SimulationConfig or SoftBodyConfig holds an out-of-range value."""
