"""
Force models for one-dimensional vertical motion.

Sign convention: positive is up. Gravity always points down, drag always
opposes the current velocity.

Physical units:
- Forces: Newtons [N]
- Velocities: meters per second [m/s]
- Areas: square meters [m²]
- Densities: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations

import numpy as np

from .state import SimulationParams


class Gravity:
    """
    Uniform gravitational force.

    Force: F = -m * g

    Parameters
    ----------
    g : float
        Gravitational acceleration magnitude [m/s²]. Earth: 9.81

    Examples
    --------
    >>> Gravity(9.81).force(2.0)
    -19.62
    """
    def __init__(self, g: float) -> None:
        self.g = float(g)

    def force(self, mass: float) -> float:
        """Downward weight of a body of ``mass`` [N]."""
        return -mass * self.g


class Drag:
    """
    Quadratic aerodynamic drag.

    Magnitude: |F| = 0.5 * ρ * v² * Cd * A, directed against v.

    Parameters
    ----------
    rho : float
        Air density [kg/m³]. Standard sea level: 1.225 kg/m³
    Cd : float
        Drag coefficient [-]. Typical sphere ≈ 0.47
    area : float
        Reference area [m²]

    Notes
    -----
    A body at rest feels no drag. The zero case is handled explicitly so a
    stationary body never picks up a force from sign(0).
    """
    def __init__(self, rho: float, Cd: float, area: float) -> None:
        self.rho = float(rho)
        self.Cd = float(Cd)
        self.area = float(area)

    def magnitude(self, v: float) -> float:
        return 0.5 * self.rho * v * v * self.Cd * self.area

    def force(self, v: float) -> float:
        """Signed drag force for vertical velocity ``v`` [N]."""
        if v == 0:
            return 0.0
        return float(-np.sign(v) * self.magnitude(v))


def gravity_force(params: SimulationParams) -> float:
    """Weight of the body, Fg = -m g [N]."""
    return Gravity(params.gravity).force(params.mass)


def drag_force(params: SimulationParams, v: float) -> float:
    """Drag on the body moving at ``v`` [N]."""
    return Drag(params.air_density, params.drag_coeff, params.area).force(v)


def net_acceleration(params: SimulationParams, v: float) -> float:
    """
    Net vertical acceleration a = (Fg + Fd) / m.

    Parameters
    ----------
    params : SimulationParams
        Physical configuration
    v : float
        Current vertical velocity [m/s]

    Returns
    -------
    float
        Acceleration [m/s²]. Equals -g when drag-free or at rest.
    """
    f_net = gravity_force(params) + drag_force(params, v)
    return f_net / params.mass


def terminal_velocity(params: SimulationParams) -> float | None:
    """
    Terminal speed where drag balances weight.

    v_t = √(2mg / (ρ A Cd))

    Returns
    -------
    float | None
        Terminal speed [m/s], or None when there is no drag
        (``drag_coeff`` or ``air_density`` is zero).
    """
    if params.drag_coeff <= 0 or params.air_density <= 0 or params.area <= 0:
        return None
    return float(np.sqrt(
        2.0 * params.mass * params.gravity
        / (params.air_density * params.area * params.drag_coeff)
    ))
