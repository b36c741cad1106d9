"""
Example 03: Driving the Stepper from a render-style loop.

Uses a millisecond clock (as a browser animation frame or game loop would
supply), simulates a stalled frame, pauses and resumes, and exports the
history with pandas.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from dropsim import SimulationParams, Stepper, StepperConfig
from dropsim.utils.io import history_to_frame, save_history


def run_example():
    stepper = Stepper(
        SimulationParams(mass=2.0, height=80.0, diameter=0.3, time_scale=2.0),
        StepperConfig(clock_scale=1e-3),
    )

    now_ms = 0.0
    stepper.start()
    frame = 0
    while stepper.is_playing:
        frame += 1
        now_ms += 500.0 if frame == 30 else 16.7  # one stalled frame
        state, _ = stepper.advance(now_ms)

        if frame == 60:
            stepper.pause()
            print(f"[Loop] paused at t={state.time:.2f}s, y={state.y:.1f}m")
            now_ms += 2000.0  # time passes while paused
            stepper.start()

    print(f"[Loop] landed at t={stepper.display_state.time:.2f}s after {frame} frames")

    df = history_to_frame(stepper.history)
    print(df.describe())
    save_history(stepper.history, Path("output") / "03_frame_loop.csv")


if __name__ == "__main__":
    run_example()
