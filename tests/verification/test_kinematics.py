"""
Kinematic Verification Tests.

Drag-free fall against the closed form:
    y(t) = h - ½gt²
    v(t) = -gt

Semi-implicit Euler with step dt gives exactly
    v_n = -g n dt
    y_n = h - ½ g t_n (t_n + dt)
so the position error is ½ g t dt, first order in dt.
"""

import numpy as np
import pytest

from dropsim.core.integrator import step
from dropsim.core.reference import vacuum_fall_time, vacuum_height, vacuum_impact_speed
from dropsim.core.stepper import Stepper
from dropsim.dynamics.state import initial_state

from .helpers import FIXED_STEP, fall, impact_speed


class TestFreeFall:

    def test_free_fall_velocity(self, vacuum_params):
        g = vacuum_params.gravity
        s = initial_state(vacuum_params)
        for _ in range(300):
            s = step(s, vacuum_params, FIXED_STEP)
        assert s.v == pytest.approx(-g * s.time, rel=1e-9)

    def test_free_fall_position(self, vacuum_params):
        g = vacuum_params.gravity
        s = initial_state(vacuum_params)
        for _ in range(500):
            s = step(s, vacuum_params, FIXED_STEP)
        t = s.time
        error = abs(s.y - float(vacuum_height(vacuum_params, t)))
        bound = 0.5 * g * t * FIXED_STEP
        assert error <= bound * 1.01 + 1e-9, f"Position error {error:.6f}m exceeds {bound:.6f}m"

    def test_error_shrinks_with_step(self, vacuum_params):
        errors = []
        for dt in (0.02, 0.01, 0.005):
            s = initial_state(vacuum_params)
            for _ in range(int(round(2.0 / dt))):
                s = step(s, vacuum_params, dt)
            errors.append(abs(s.y - float(vacuum_height(vacuum_params, s.time))))
        assert errors[0] > errors[1] > errors[2]

    def test_landing_time_matches_closed_form(self, vacuum_params):
        states = fall(vacuum_params)
        assert states[-1].has_landed
        assert states[-1].time == pytest.approx(vacuum_fall_time(vacuum_params), abs=2 * FIXED_STEP)

    def test_impact_speed_matches_closed_form(self, vacuum_params):
        v = impact_speed(fall(vacuum_params))
        assert v == pytest.approx(vacuum_impact_speed(vacuum_params), rel=0.01)

    def test_trajectory_through_stepper(self, vacuum_params):
        """Sampled history follows the closed form within the Euler bound."""
        stepper = Stepper(vacuum_params)
        stepper.start()
        now = 0.0
        stepper.advance(now)
        while stepper.is_playing:
            now += 1 / 60
            stepper.advance(now)

        g = vacuum_params.gravity
        airborne = [p for p in stepper.history if p.position > 0]
        t = np.array([p.time for p in airborne])
        y = np.array([p.position for p in airborne])
        err = np.abs(y - vacuum_height(vacuum_params, t))
        assert np.all(err <= 0.5 * g * t * FIXED_STEP + 1e-6)
        assert stepper.display_state.time == pytest.approx(
            vacuum_fall_time(vacuum_params), abs=2 * FIXED_STEP
        )
