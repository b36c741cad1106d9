from .state import (
    DEFAULT_PARAMS,
    GRAVITY_PRESETS,
    DataPoint,
    SimulationParams,
    SimulationState,
    initial_state,
)
from .forces import Gravity, Drag, drag_force, gravity_force, net_acceleration, terminal_velocity
