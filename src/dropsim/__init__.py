"""
dropsim - Frame-rate independent simulation of a body falling through air.

Core Components
---------------
step : Pure semi-implicit Euler integrator with ground contact
Stepper : Wall-clock scheduler with sub-stepping and trajectory history
PlaybackState : IDLE / PLAYING / PAUSED / LANDED state machine

Data Model
----------
SimulationParams : Immutable physical configuration
SimulationState : Instantaneous kinematic state
DataPoint : Decimated trajectory sample

Examples
--------
>>> from dropsim import Stepper, SimulationParams
>>> stepper = Stepper(SimulationParams(height=100.0))
>>> stepper.start()
"""

__version__ = "0.1.0"

# Data model
from dropsim.dynamics.state import (
    DEFAULT_PARAMS,
    GRAVITY_PRESETS,
    DataPoint,
    SimulationParams,
    SimulationState,
    initial_state,
)

# Forces
from dropsim.dynamics.forces import Drag, Gravity, net_acceleration, terminal_velocity

# Core simulation
from dropsim.core.integrator import MAX_VELOCITY, step
from dropsim.core.playback import PlaybackEvent, PlaybackState, TransitionError
from dropsim.core.stepper import Stepper, StepperConfig
from dropsim.core.reference import reference_solution

# Logging
from dropsim.logger import CSVLogger
from dropsim.api.scenario import Scenario

__all__ = [
    # Version
    "__version__",
    # Data model
    "SimulationParams",
    "SimulationState",
    "DataPoint",
    "DEFAULT_PARAMS",
    "GRAVITY_PRESETS",
    "initial_state",
    # Forces
    "Gravity",
    "Drag",
    "net_acceleration",
    "terminal_velocity",
    # Core
    "step",
    "MAX_VELOCITY",
    "Stepper",
    "StepperConfig",
    "PlaybackState",
    "PlaybackEvent",
    "TransitionError",
    "reference_solution",
    # Logging
    "CSVLogger",
    # API
    "Scenario",
]
