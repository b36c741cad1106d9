"""
Playback state machine for the stepper.

State Machine:
    IDLE --START--> PLAYING --LAND--> LANDED
                     |   ^              |
                PAUSE|   |START         |START (reset first)
                     v   |              |
                    PAUSED              +--> PLAYING

    RESET from any state returns to IDLE.
"""
from __future__ import annotations

from enum import Enum, auto


class PlaybackState(Enum):
    """Playback states of a simulation."""

    IDLE = auto()  # At the drop position, never advanced or just reset
    PLAYING = auto()  # Driver is ticking
    PAUSED = auto()  # Suspended mid-fall
    LANDED = auto()  # Body on the ground, terminal until reset


class PlaybackEvent(Enum):
    """Commands and notifications that drive the playback machine."""

    START = auto()
    PAUSE = auto()
    LAND = auto()
    RESET = auto()


class TransitionError(ValueError):
    """Raised when an event is not defined for the current state."""


_TRANSITIONS: dict[tuple[PlaybackState, PlaybackEvent], PlaybackState] = {
    (PlaybackState.IDLE, PlaybackEvent.START): PlaybackState.PLAYING,
    (PlaybackState.IDLE, PlaybackEvent.PAUSE): PlaybackState.IDLE,
    (PlaybackState.PLAYING, PlaybackEvent.START): PlaybackState.PLAYING,
    (PlaybackState.PLAYING, PlaybackEvent.PAUSE): PlaybackState.PAUSED,
    (PlaybackState.PLAYING, PlaybackEvent.LAND): PlaybackState.LANDED,
    (PlaybackState.PAUSED, PlaybackEvent.START): PlaybackState.PLAYING,
    (PlaybackState.PAUSED, PlaybackEvent.PAUSE): PlaybackState.PAUSED,
    (PlaybackState.LANDED, PlaybackEvent.START): PlaybackState.PLAYING,
    (PlaybackState.LANDED, PlaybackEvent.PAUSE): PlaybackState.LANDED,
}


def transition(state: PlaybackState, event: PlaybackEvent) -> PlaybackState:
    """
    Return the state reached from ``state`` on ``event``.

    Raises
    ------
    TransitionError
        If the pair is undefined, e.g. LAND while not playing.

    Notes
    -----
    START from LANDED only yields PLAYING; reinitializing the simulation is
    the caller's job and must happen before the next tick.
    """
    if event is PlaybackEvent.RESET:
        return PlaybackState.IDLE
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise TransitionError(
            f"No transition from {state.name} on {event.name}"
        ) from None


def is_playing(state: PlaybackState) -> bool:
    return state is PlaybackState.PLAYING
