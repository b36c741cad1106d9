"""
Parameter and state containers for the falling-body simulation.

All physical quantities use SI units:
- Height / position: meters [m]
- Velocity: meters per second [m/s] (negative = falling)
- Acceleration: meters per second squared [m/s²]
- Mass: kilograms [kg]
- Air density: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace


# Gravitational acceleration of common bodies [m/s²]
GRAVITY_PRESETS: dict[str, float] = {
    "earth": 9.81,
    "moon": 1.62,
    "mars": 3.71,
}


@dataclass(frozen=True)
class SimulationParams:
    """
    Physical configuration of a single drop.

    Instances are immutable; edits produce a new object via ``replace``.

    Parameters
    ----------
    mass : float
        Body mass [kg], > 0
    height : float
        Initial drop height above ground [m], > 0
    drag_coeff : float
        Drag coefficient Cd [-], >= 0. Sphere ≈ 0.47
    air_density : float
        Air density ρ [kg/m³], >= 0. Sea level ≈ 1.225
    diameter : float
        Body diameter [m], > 0. Defines the reference area.
    gravity : float
        Gravitational acceleration magnitude [m/s²], > 0
    time_scale : float
        Simulation speed multiplier applied to wall-clock time, > 0

    Notes
    -----
    Parameters are not validated here. Callers constrain inputs with
    ``dropsim.utils.validation.validate_params`` before handing them to
    the simulation core.
    """

    mass: float = 10.0
    height: float = 200.0
    drag_coeff: float = 0.47
    air_density: float = 1.225
    diameter: float = 0.5
    gravity: float = 9.81
    time_scale: float = 1.0

    @property
    def area(self) -> float:
        """Frontal reference area A = π (d/2)² [m²]."""
        radius = self.diameter / 2.0
        return math.pi * radius * radius

    def replace(self, **changes: float) -> SimulationParams:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_PARAMS = SimulationParams()


@dataclass(frozen=True)
class SimulationState:
    """
    Kinematic state of the body at one instant.

    Attributes
    ----------
    time : float
        Simulation time since drop [s]
    y : float
        Height above ground [m], never negative
    v : float
        Vertical velocity [m/s], negative while falling
    a : float
        Net vertical acceleration [m/s²]
    has_landed : bool
        Terminal flag. A landed state stays frozen until reset.
    """

    time: float
    y: float
    v: float
    a: float
    has_landed: bool = False


def initial_state(params: SimulationParams) -> SimulationState:
    """Drop configuration: at rest at ``height`` with pure gravity acceleration."""
    return SimulationState(
        time=0.0,
        y=params.height,
        v=0.0,
        a=-params.gravity,
        has_landed=False,
    )


@dataclass(frozen=True)
class DataPoint:
    """One decimated trajectory sample for charting and export."""

    time: float
    position: float
    velocity: float
    acceleration: float

    @classmethod
    def from_state(cls, state: SimulationState) -> DataPoint:
        return cls(
            time=state.time,
            position=state.y,
            velocity=state.v,
            acceleration=state.a,
        )
