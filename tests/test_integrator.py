"""
Tests for the fixed-step integrator.
"""
import math

import pytest

from dropsim.core.integrator import MAX_VELOCITY, is_diverged, step, touchdown_velocity
from dropsim.dynamics.state import (
    DEFAULT_PARAMS,
    SimulationParams,
    SimulationState,
    initial_state,
)


@pytest.fixture
def params():
    return DEFAULT_PARAMS


@pytest.fixture
def vacuum():
    """Drag-free configuration."""
    return DEFAULT_PARAMS.replace(drag_coeff=0.0, air_density=0.0)


def test_initial_state(params):
    s = initial_state(params)
    assert s.time == 0.0
    assert s.y == params.height
    assert s.v == 0.0
    assert s.a == -params.gravity
    assert s.has_landed is False


def test_zero_dt_leaves_initial_state_unchanged(params):
    s0 = initial_state(params)
    s = s0
    for _ in range(10):
        s = step(s, params, 0.0)
    assert s.time == s0.time
    assert s.y == s0.y
    assert s.v == s0.v
    assert s.a == pytest.approx(s0.a)
    assert s.has_landed is False


def test_zero_dt_keeps_position_mid_fall(params):
    s = initial_state(params)
    for _ in range(100):
        s = step(s, params, 0.01)
    held = step(s, params, 0.0)
    assert held.time == s.time
    assert held.y == s.y
    assert held.v == s.v
    # Once acceleration matches velocity the state is a fixed point
    assert step(held, params, 0.0) == held


def test_semi_implicit_update_uses_new_velocity(vacuum):
    s = step(initial_state(vacuum), vacuum, 0.1)
    assert s.v == pytest.approx(-0.981)
    # y' = y + v' dt, not y + v dt
    assert s.y == pytest.approx(200.0 - 0.0981)
    assert s.a == pytest.approx(-9.81)
    assert s.time == pytest.approx(0.1)


def test_drag_reduces_downward_acceleration(params):
    falling = SimulationState(time=1.0, y=100.0, v=-20.0, a=-9.81)
    s = step(falling, params, 0.01)
    assert -params.gravity < s.a < 0.0


def test_drag_adds_to_gravity_while_rising(params):
    rising = SimulationState(time=1.0, y=100.0, v=20.0, a=-9.81)
    s = step(rising, params, 0.01)
    assert s.a < -params.gravity


def test_landed_state_is_absorbing(params):
    landed = SimulationState(time=7.5, y=0.0, v=0.0, a=0.0, has_landed=True)
    for dt in (0.0, 0.01, 1.0, 100.0):
        assert step(landed, params, dt) is landed


def test_ground_contact_zeroes_motion(params):
    s = SimulationState(time=3.0, y=0.05, v=-10.0, a=-9.0)
    out = step(s, params, 0.01)
    assert out.has_landed is True
    assert out.y == 0.0
    assert out.v == 0.0
    assert out.a == 0.0
    assert out.time == pytest.approx(3.01)


def test_velocity_clamped_downward():
    heavy = SimulationParams(gravity=1e6, drag_coeff=0.0, air_density=0.0)
    s = step(initial_state(heavy), heavy, 0.01)
    assert s.v == -MAX_VELOCITY
    assert s.y == pytest.approx(200.0 - MAX_VELOCITY * 0.01)


def test_velocity_clamp_preserves_sign(vacuum):
    s = SimulationState(time=0.0, y=100.0, v=1000.0, a=0.0)
    out = step(s, vacuum, 0.01)
    assert out.v == MAX_VELOCITY
    assert out.y == pytest.approx(105.0)


@pytest.mark.parametrize("y, v", [
    (math.nan, 0.0),
    (100.0, math.nan),
    (100.0, math.inf),
    (100.0, -math.inf),
])
def test_divergence_recovers_to_drop_configuration(params, y, v):
    s = SimulationState(time=4.2, y=y, v=v, a=-3.0)
    assert is_diverged(s)
    assert step(s, params, 0.01) == initial_state(params)


def test_finite_state_is_not_diverged(params):
    assert not is_diverged(initial_state(params))


def test_step_does_not_mutate_input(params):
    s = initial_state(params)
    before = (s.time, s.y, s.v, s.a, s.has_landed)
    step(s, params, 0.01)
    assert (s.time, s.y, s.v, s.a, s.has_landed) == before


def test_touchdown_velocity_interpolates_within_step(vacuum):
    s = SimulationState(time=3.0, y=0.05, v=-10.0, a=-9.81)
    v_contact = touchdown_velocity(s, vacuum, 0.01)
    # v' = -10.0981 moves the body 0.100981 m; contact after ~49.5% of dt
    f = 0.05 / 0.100981
    assert v_contact == pytest.approx(-10.0 - f * 0.0981)
    assert -10.0981 < v_contact < -10.0


def test_touchdown_velocity_none_when_step_stays_airborne(params):
    assert touchdown_velocity(initial_state(params), params, 0.01) is None


def test_touchdown_velocity_none_for_landed_or_diverged(params):
    landed = SimulationState(time=7.5, y=0.0, v=0.0, a=0.0, has_landed=True)
    assert touchdown_velocity(landed, params, 0.01) is None
    bad = SimulationState(time=1.0, y=10.0, v=math.nan, a=0.0)
    assert touchdown_velocity(bad, params, 0.01) is None
