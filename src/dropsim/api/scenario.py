"""
Scenario API: Fluent interface for defining and running a drop headlessly.

Drives a ``Stepper`` with a synthetic clock at a fixed frame rate, the way a
render loop would, until the body lands.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from dropsim.core.stepper import Stepper, StepperConfig
from dropsim.dynamics.forces import terminal_velocity
from dropsim.dynamics.state import DEFAULT_PARAMS, GRAVITY_PRESETS, SimulationParams
from dropsim.logger import CSVLogger
from dropsim.utils.validation import validate_params


class Scenario:
    """
    One named drop experiment.

    Parameters
    ----------
    name : str
        Scenario name. Used for the output folder when logging.
    params : SimulationParams
        Physical configuration. Validated on construction.
    output_dir : str | Path
        Base directory for logs and plots.
    config : StepperConfig | None
        Stepper timing constants.

    Examples
    --------
    >>> scenario = Scenario("moon_drop") \\
    ...     .use_gravity("moon") \\
    ...     .with_params(height=50.0) \\
    ...     .run()
    >>> scenario.landing_time
    """

    def __init__(
        self,
        name: str,
        params: SimulationParams = DEFAULT_PARAMS,
        output_dir: str | Path = "output",
        config: StepperConfig | None = None,
    ) -> None:
        validate_params(params)
        self.name = name
        self.params = params
        self.config = config if config is not None else StepperConfig()
        self._output_dir = Path(output_dir)

        self.output_path: Path | None = None
        self._csv_path: Path | None = None
        self._auto_save_plots = False
        self._show_plots = False

        self.stepper: Stepper | None = None
        self.landing_time: float | None = None
        self.impact_speed: float | None = None
        self.frames = 0

    # --- Configuration ---

    def with_params(self, **changes: float) -> Scenario:
        """Override individual parameters, e.g. ``with_params(mass=2.0)``."""
        params = self.params.replace(**changes)
        validate_params(params)
        self.params = params
        return self

    def use_gravity(self, preset: str) -> Scenario:
        """
        Select gravity by body name.

        Presets: 'earth', 'moon', 'mars'
        """
        try:
            g = GRAVITY_PRESETS[preset.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown gravity preset '{preset}'. Valid options: {sorted(GRAVITY_PRESETS)}"
            ) from None
        return self.with_params(gravity=g)

    def configure_timing(self, **kwargs) -> Scenario:
        """
        Override stepper timing constants.

        Kwargs: fixed_step, max_frame_dt, sample_interval, max_history, clock_scale
        """
        self.config = replace(self.config, **kwargs)
        return self

    def enable_logging(self, auto_timestamp: bool = True) -> Path:
        """
        Record every history sample to CSV.

        Creates:
            output_dir/name_YYYYmmdd_HHMMSS/
                logs/trajectory.csv
                plots/

        Returns
        -------
        Path
            Path to the created output directory
        """
        if auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self.name}_{timestamp}"
        else:
            folder_name = self.name

        self.output_path = self._output_dir / folder_name
        logs_dir = self.output_path / "logs"
        plots_dir = self.output_path / "plots"
        logs_dir.mkdir(parents=True, exist_ok=True)
        plots_dir.mkdir(parents=True, exist_ok=True)
        self._csv_path = logs_dir / "trajectory.csv"

        print(f"[Scenario] Logging enabled: {self.output_path}")
        return self.output_path

    def enable_plotting(self, show: bool = False) -> Scenario:
        """
        Enable plot generation at the end of the run.

        Parameters
        ----------
        show : bool
            If True, display plots interactively (e.g. in Jupyter notebooks).
        """
        self._auto_save_plots = True
        self._show_plots = show
        return self

    # --- Execution ---

    def run(
        self,
        frame_rate: float = 60.0,
        max_duration: float = 600.0,
        log_interval: float = 1.0,
    ) -> Scenario:
        """
        Tick the stepper at ``frame_rate`` until landing.

        Parameters
        ----------
        frame_rate : float
            Synthetic ticks per wall-clock second
        max_duration : float
            Give up after this much wall-clock time [s]
        log_interval : float
            Simulation-time interval [s] between progress lines. <= 0 disables.
        """
        print(f"Running Scenario: {self.name}")
        vt = terminal_velocity(self.params)
        vt_msg = f"{vt:.2f} m/s" if vt is not None else "none (drag-free)"
        print(f"[Scenario] h={self.params.height:.1f}m, m={self.params.mass:.2f}kg, "
              f"g={self.params.gravity:.2f}m/s², terminal velocity {vt_msg}")

        logger = CSVLogger(self._csv_path) if self._csv_path is not None else None
        stepper = Stepper(self.params, self.config, logger=logger)
        self.stepper = stepper

        frame = 1.0 / frame_rate
        wall = 0.0
        last_log_time = 0.0
        self.frames = 0

        try:
            stepper.start()
            stepper.advance(wall / self.config.clock_scale)
            while stepper.is_playing:
                wall += frame
                state, _ = stepper.advance(wall / self.config.clock_scale)
                self.frames += 1

                if log_interval > 0 and (state.time - last_log_time) >= log_interval:
                    print(f"[Scenario] t={state.time:6.2f}s | y={state.y:8.2f}m, v={state.v:7.2f}m/s")
                    last_log_time = state.time

                if stepper.is_playing and wall >= max_duration:
                    print(f"[Scenario] Stopped after {max_duration}s without landing")
                    stepper.pause()
        finally:
            if logger is not None:
                logger.close()

        final = stepper.display_state
        self.landing_time = final.time if final.has_landed else None
        self.impact_speed = stepper.impact_speed

        if self.landing_time is not None:
            print(f"[Scenario] Landed at t={self.landing_time:.3f}s, "
                  f"impact speed {self.impact_speed:.2f}m/s ({self.frames} frames)")
        if stepper.recoveries:
            print(f"[Scenario] Divergence guard fired {stepper.recoveries} time(s)")

        if self._auto_save_plots:
            if self.output_path is not None:
                self.save_plots(show=self._show_plots)
            elif self._show_plots:
                self._plot(show=True)

        return self

    # --- Plotting ---

    def _plot(self, plots_dir: Path | None = None, show: bool = False) -> None:
        import matplotlib.pyplot as plt

        from dropsim.visualization.plotting import plot_kinematics, plot_speed

        if self.stepper is None:
            raise RuntimeError("Scenario has not been run yet.")

        history = self.stepper.history
        figures = [
            plot_speed(
                history, self.params,
                save_path=str(plots_dir / "speed.png") if plots_dir else None,
                show=show,
            ),
            plot_kinematics(
                history,
                save_path=str(plots_dir / "kinematics.png") if plots_dir else None,
                show=show,
            ),
        ]
        if not show:
            for fig in figures:
                plt.close(fig)

    def save_plots(self, show: bool = False) -> None:
        """
        Save speed and kinematics plots into the scenario's plots folder.

        Raises
        ------
        RuntimeError
            If logging is not enabled or the scenario has not been run
        """
        if self.output_path is None:
            raise RuntimeError(
                "Logging must be enabled to save plots. Call enable_logging()."
            )
        plots_dir = self.output_path / "plots"
        self._plot(plots_dir, show=show)
        print(f"[Scenario] Plots saved to: {plots_dir}")
