from .integrator import MAX_VELOCITY, is_diverged, step, touchdown_velocity
from .playback import PlaybackEvent, PlaybackState, TransitionError, transition
from .stepper import Stepper, StepperConfig
from .reference import (
    ReferenceResult,
    reference_solution,
    vacuum_fall_time,
    vacuum_height,
    vacuum_impact_speed,
)
