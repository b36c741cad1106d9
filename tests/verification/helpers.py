"""Shared constants and drivers for the verification tests."""

from dropsim.core.integrator import step
from dropsim.dynamics.state import SimulationParams, SimulationState, initial_state

FIXED_STEP = 0.01  # s, matches the stepper's sub-step
LANDING_TIME_TOLERANCE = 0.05  # s


def fall(
    params: SimulationParams,
    dt: float = FIXED_STEP,
    max_steps: int = 1_000_000,
) -> list[SimulationState]:
    """Step from the drop position until landing; return every state."""
    states = [initial_state(params)]
    while not states[-1].has_landed and len(states) <= max_steps:
        states.append(step(states[-1], params, dt))
    return states


def impact_speed(states: list[SimulationState]) -> float:
    """Speed of the last airborne state."""
    airborne = [s for s in states if not s.has_landed]
    return abs(airborne[-1].v)
