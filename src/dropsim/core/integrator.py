"""
Fixed-step integrator for the falling body.

``step`` is a pure function of (state, params, dt). It owns the force model,
the ground collision rule and the numerical stability guards. Timing and
sub-stepping live in ``dropsim.core.stepper``.
"""
from __future__ import annotations

import numpy as np

from dropsim.dynamics.forces import net_acceleration
from dropsim.dynamics.state import SimulationParams, SimulationState, initial_state

# Velocity cap [m/s]. Well above terminal velocity for any supported
# parameter set, so it only bites on runaway growth from a coarse dt.
MAX_VELOCITY = 500.0


def is_diverged(state: SimulationState) -> bool:
    """True if the state carries NaN position or a non-finite velocity."""
    return bool(np.isnan(state.y) or not np.isfinite(state.v))


def step(state: SimulationState, params: SimulationParams, dt: float) -> SimulationState:
    """
    Advance the body by one time step with semi-implicit Euler.

    Parameters
    ----------
    state : SimulationState
        Current state. Not modified.
    params : SimulationParams
        Physical configuration
    dt : float
        Time step [s], >= 0

    Returns
    -------
    SimulationState
        The next state. A landed input is returned as-is (time included).
        A diverged input is replaced by the initial drop configuration.

    Notes
    -----
    Velocity is updated first and the new velocity moves the body:
        v' = v + a dt
        y' = y + v' dt
    Crossing y = 0 is a perfectly inelastic stop: y, v and a are zeroed.
    """
    if state.has_landed:
        return state

    if is_diverged(state):
        return initial_state(params)

    a, v_new, y_new = _update(state, params, dt)
    t_new = state.time + dt

    if y_new <= 0:
        return SimulationState(time=t_new, y=0.0, v=0.0, a=0.0, has_landed=True)

    return SimulationState(time=t_new, y=y_new, v=v_new, a=a, has_landed=False)


def touchdown_velocity(state: SimulationState, params: SimulationParams, dt: float) -> float | None:
    """
    Velocity at the instant the body reaches the ground during ``step``.

    Parameters
    ----------
    state : SimulationState
        Airborne state the landing step starts from
    params : SimulationParams
        Physical configuration
    dt : float
        Time step [s] passed to ``step``

    Returns
    -------
    float | None
        Interpolated contact velocity [m/s], or None if this step does not
        land a finite airborne state.

    Notes
    -----
    Within one step the body moves at the constant v', so the crossing
    fraction f = y / (y - y') is also the time fraction. The velocity is
    taken linearly between v and v' at f.
    """
    if state.has_landed or is_diverged(state):
        return None

    _, v_new, y_new = _update(state, params, dt)
    if y_new > 0:
        return None

    drop = state.y - y_new
    f = state.y / drop if drop > 0 else 1.0
    return state.v + min(max(f, 0.0), 1.0) * (v_new - state.v)


def _update(state: SimulationState, params: SimulationParams, dt: float) -> tuple[float, float, float]:
    """Semi-implicit Euler update: (a, v', y')."""
    a = net_acceleration(params, state.v)

    v_new = state.v + a * dt
    if abs(v_new) > MAX_VELOCITY:
        v_new = float(np.sign(v_new)) * MAX_VELOCITY

    return a, v_new, state.y + v_new * dt
