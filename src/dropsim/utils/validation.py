"""
Validation utilities for simulation parameters.

The simulation core does not validate its inputs. Control surfaces (the
scenario runner, config loading) call these before handing parameters over.
"""
from __future__ import annotations

import warnings

import numpy as np

from dropsim.dynamics.state import SimulationParams

# Plausible upper bounds; values above only warn
SANE_LIMITS = {
    "mass": 1e5,
    "height": 1e5,
    "drag_coeff": 10.0,
    "air_density": 100.0,
    "diameter": 100.0,
    "gravity": 300.0,
    "time_scale": 100.0,
}


def validate_finite(value: float, name: str) -> None:
    """Validate that a value is a finite number."""
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        else:
            warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_params(params: SimulationParams) -> None:
    """
    Check a parameter set against physical constraints.

    Raises
    ------
    ValueError
        If any field is non-finite, or mass, height, diameter, gravity or
        time_scale is not positive, or drag_coeff or air_density is negative.

    Notes
    -----
    Values beyond ``SANE_LIMITS`` are accepted with a RuntimeWarning.
    """
    for name in SANE_LIMITS:
        validate_finite(getattr(params, name), name)

    for name in ("mass", "height", "diameter", "gravity", "time_scale"):
        validate_positive(getattr(params, name), name)
    for name in ("drag_coeff", "air_density"):
        validate_non_negative(getattr(params, name), name)

    for name, limit in SANE_LIMITS.items():
        value = getattr(params, name)
        if value > limit:
            warnings.warn(
                f"{name}={value} exceeds the supported range (<= {limit}). "
                "Results may be unrealistic.",
                RuntimeWarning,
                stacklevel=2
            )
