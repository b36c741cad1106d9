"""
Verification Test Suite for dropsim.

These tests compare simulation results against analytical solutions
and a high-accuracy reference integration to validate the fixed-step core.

Test Categories:
- Kinematic: Drag-free free fall
- Aerodynamic: Terminal velocity, drag vs impact speed, reference landing time
- Stability: Velocity clamp under extreme parameters
"""

import pytest

from dropsim.dynamics.state import DEFAULT_PARAMS


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def default_params():
    """Sphere dropped from 200 m on Earth: m=10kg, d=0.5m, Cd=0.47."""
    return DEFAULT_PARAMS


@pytest.fixture
def vacuum_params():
    """Same drop without air."""
    return DEFAULT_PARAMS.replace(drag_coeff=0.0, air_density=0.0)
