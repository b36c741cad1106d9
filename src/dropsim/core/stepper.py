"""
Frame-driven scheduler for the falling-body integrator.

Translates wall-clock ticks into simulation time, feeds the integrator
fixed-size sub-steps, publishes one display state per tick and keeps a
bounded, decimated trajectory history.
"""
from __future__ import annotations

import warnings
from collections import deque
from dataclasses import dataclass, replace

from dropsim.dynamics.state import (
    DEFAULT_PARAMS,
    DataPoint,
    SimulationParams,
    SimulationState,
    initial_state,
)
from dropsim.logger import CSVLogger

from .integrator import is_diverged, step, touchdown_velocity
from .playback import PlaybackEvent, PlaybackState, is_playing, transition

# Leftover frame time below this is float noise from repeated subtraction [s]
EPSILON_TIME = 1e-12


@dataclass(frozen=True)
class StepperConfig:
    """
    Timing and sampling constants.

    Parameters
    ----------
    fixed_step : float
        Integrator sub-step [s]
    max_frame_dt : float
        Upper bound on the elapsed time consumed per tick [s]. Bounds the
        work and the error after a stalled driver.
    sample_interval : float
        Minimum simulation time between history samples [s]
    max_history : int
        History capacity. Oldest samples are evicted first.
    clock_scale : float
        Seconds per timestamp unit passed to ``advance``. Use 1e-3 for
        millisecond clocks.
    """

    fixed_step: float = 0.01
    max_frame_dt: float = 0.1
    sample_interval: float = 0.03
    max_history: int = 500
    clock_scale: float = 1.0


class Stepper:
    """
    Owner of the live simulation state.

    Parameters
    ----------
    params : SimulationParams
        Initial physical configuration
    config : StepperConfig | None
        Timing constants. Defaults to ``StepperConfig()``.
    logger : CSVLogger | None
        If given, history samples are also written to it from the first
        ``start`` on. Seed samples taken while idle are only written once
        the drop actually starts.

    Attributes
    ----------
    params : SimulationParams
        Current parameters. Replace through ``set_params``.
    display_state : SimulationState
        Last published snapshot, updated once per ``advance``.
    playback : PlaybackState
        Current playback state
    recoveries : int
        Number of times the divergence guard reset the body
    impact_speed : float | None
        Speed at ground contact [m/s], set on the tick that lands and
        cleared by ``reset``

    Examples
    --------
    >>> stepper = Stepper(DEFAULT_PARAMS)
    >>> stepper.start()
    >>> t = 0.0
    >>> while stepper.is_playing:
    ...     state, appended = stepper.advance(t)
    ...     t += 1 / 60
    >>> stepper.display_state.has_landed
    True

    Notes
    -----
    ``advance`` must be called serially with monotonically increasing
    timestamps. It never blocks; each call runs at most
    ``max_frame_dt * time_scale / fixed_step`` integrator steps.
    """

    def __init__(
        self,
        params: SimulationParams = DEFAULT_PARAMS,
        config: StepperConfig | None = None,
        logger: CSVLogger | None = None,
    ) -> None:
        self.params = params
        self.config = config if config is not None else StepperConfig()
        self.logger = logger
        self.playback = PlaybackState.IDLE
        self.recoveries = 0
        self.impact_speed: float | None = None

        self._state = initial_state(params)
        self.display_state = self._state
        self._history: deque[DataPoint] = deque(maxlen=self.config.max_history)
        self._last_timestamp: float | None = None
        self._seed_history()

    # --- Read access for render/chart collaborators ---

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def history(self) -> tuple[DataPoint, ...]:
        """Ordered trajectory samples, oldest first."""
        return tuple(self._history)

    @property
    def is_playing(self) -> bool:
        return is_playing(self.playback)

    # --- Control surface ---

    def start(self) -> None:
        """Begin or resume ticking. From LANDED the drop is reset first."""
        if self.playback is PlaybackState.LANDED:
            self.reset()
        if self.playback is PlaybackState.IDLE and self.logger is not None:
            # The idle history holds only the seed sample
            self.logger.log(self._history[0])
        if not self.is_playing:
            self._last_timestamp = None
        self.playback = transition(self.playback, PlaybackEvent.START)

    def pause(self) -> None:
        self.playback = transition(self.playback, PlaybackEvent.PAUSE)
        if not self.is_playing:
            self._last_timestamp = None

    def reset(self) -> None:
        """Return to the drop configuration. Parameters are kept."""
        self.playback = transition(self.playback, PlaybackEvent.RESET)
        self._state = initial_state(self.params)
        self.display_state = self._state
        self._last_timestamp = None
        self.impact_speed = None
        self._seed_history()

    def set_params(self, params: SimulationParams) -> None:
        """
        Replace the parameters.

        Before the first tick (stopped at t = 0) the preview is re-derived
        from the new height and gravity. Otherwise the running state is kept
        and the new parameters apply from the next sub-step.
        """
        self.params = params
        if not self.is_playing and self._state.time == 0:
            self._state = replace(self._state, y=params.height, a=-params.gravity)
            self.display_state = self._state
            self._seed_history()

    # --- Frame tick ---

    def advance(self, now: float) -> tuple[SimulationState, bool]:
        """
        Consume the wall-clock time elapsed since the previous tick.

        Parameters
        ----------
        now : float
            Driver timestamp, in units of ``config.clock_scale`` seconds

        Returns
        -------
        tuple[SimulationState, bool]
            The published display state and whether a history sample was
            appended on this tick.
        """
        if not self.is_playing:
            return self.display_state, False

        if self._last_timestamp is None:
            # Baseline tick: no elapsed time yet
            self._last_timestamp = now
            return self.display_state, False

        cfg = self.config
        raw_dt = (now - self._last_timestamp) * cfg.clock_scale
        self._last_timestamp = now
        frame_dt = min(max(raw_dt, 0.0), cfg.max_frame_dt)
        remaining = frame_dt * self.params.time_scale

        state = self._state
        was_landed = state.has_landed
        recovered = False
        while remaining > EPSILON_TIME and not state.has_landed:
            h = min(remaining, cfg.fixed_step)
            if is_diverged(state):
                recovered = True
            nxt = step(state, self.params, h)
            if nxt.has_landed:
                v_contact = touchdown_velocity(state, self.params, h)
                if v_contact is not None:
                    self.impact_speed = abs(v_contact)
            state = nxt
            remaining -= h

        self._state = state
        if recovered:
            self._on_recovery()

        if state.has_landed:
            self.playback = transition(self.playback, PlaybackEvent.LAND)

        self.display_state = state
        appended = self._sample(just_landed=state.has_landed and not was_landed)
        return state, appended

    # --- History ---

    def _sample(self, just_landed: bool) -> bool:
        state = self._state
        last = self._history[-1] if self._history else None
        if (
            last is None
            or state.time - last.time > self.config.sample_interval
            or just_landed
        ):
            self._append(DataPoint.from_state(state))
            return True
        return False

    def _append(self, point: DataPoint) -> None:
        self._history.append(point)
        if self.logger is not None:
            self.logger.log(point)

    def _seed_history(self) -> None:
        self._history.clear()
        self._history.append(DataPoint.from_state(self._state))

    def _on_recovery(self) -> None:
        self.recoveries += 1
        warnings.warn(
            "Non-finite state detected; body reset to the drop position.",
            RuntimeWarning,
            stacklevel=3,
        )
        # Time restarted at zero, so earlier samples no longer line up
        self._history.clear()
