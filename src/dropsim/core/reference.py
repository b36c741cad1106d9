"""
Reference solutions for verifying the fixed-step core.

Closed forms for the drag-free drop, and a tight-tolerance variable-step
solution of the full drag model via scipy.integrate.solve_ivp with a
terminal ground-contact event.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dropsim.dynamics.forces import net_acceleration
from dropsim.dynamics.state import SimulationParams


def vacuum_fall_time(params: SimulationParams) -> float:
    """Drag-free fall time t = √(2h/g) [s]."""
    return float(np.sqrt(2.0 * params.height / params.gravity))


def vacuum_impact_speed(params: SimulationParams) -> float:
    """Drag-free impact speed v = √(2gh) [m/s]."""
    return float(np.sqrt(2.0 * params.gravity * params.height))


def vacuum_height(params: SimulationParams, t: float | np.ndarray) -> float | np.ndarray:
    """Drag-free height y(t) = h - ½gt² (not clipped at the ground)."""
    return params.height - 0.5 * params.gravity * np.asarray(t) ** 2


@dataclass
class ReferenceResult:
    """
    Output of ``reference_solution``.

    Attributes
    ----------
    t : np.ndarray
        Solver time grid [s]
    y : np.ndarray
        Height on the grid [m]
    v : np.ndarray
        Velocity on the grid [m/s]
    landing_time : float | None
        Ground contact time [s], None if not reached before ``t_max``
    impact_speed : float | None
        |v| at ground contact [m/s]
    """

    t: np.ndarray
    y: np.ndarray
    v: np.ndarray
    landing_time: float | None
    impact_speed: float | None


def reference_solution(
    params: SimulationParams,
    t_max: float | None = None,
    method: str = "RK45",
    rtol: float = 1e-9,
    atol: float = 1e-9,
) -> ReferenceResult:
    """
    Integrate the drop with an adaptive solver until ground contact.

    Parameters
    ----------
    params : SimulationParams
        Physical configuration
    t_max : float | None
        Integration horizon [s]. Default: 100 x the vacuum fall time.
    method : str
        ``solve_ivp`` method name
    rtol, atol : float
        Solver tolerances

    Returns
    -------
    ReferenceResult
    """
    try:
        from scipy.integrate import solve_ivp
    except Exception as e:
        raise ImportError("SciPy is required for reference_solution. Install scipy>=1.8.") from e

    if t_max is None:
        t_max = 100.0 * vacuum_fall_time(params)

    def rhs(t: float, s: np.ndarray) -> np.ndarray:
        return np.array([s[1], net_acceleration(params, float(s[1]))])

    def touchdown_event(t: float, s: np.ndarray) -> float:
        return float(s[0])
    touchdown_event.terminal = True   # type: ignore[attr-defined]
    touchdown_event.direction = -1.0  # type: ignore[attr-defined]

    sol = solve_ivp(
        rhs,
        t_span=(0.0, float(t_max)),
        y0=np.array([params.height, 0.0]),
        method=method,
        rtol=rtol,
        atol=atol,
        events=touchdown_event,
    )

    landing_time = None
    impact_speed = None
    if len(sol.t_events[0]):
        landing_time = float(sol.t_events[0][0])
        impact_speed = float(abs(sol.y_events[0][0][1]))

    return ReferenceResult(
        t=sol.t,
        y=sol.y[0],
        v=sol.y[1],
        landing_time=landing_time,
        impact_speed=impact_speed,
    )
