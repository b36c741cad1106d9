"""
Example 01: Simple Drop Test using the Scenario API.

Drops the default 10 kg sphere from 200 m, logs the sampled trajectory
and saves speed and kinematics plots.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from dropsim.api.scenario import Scenario


def run_example():
    scenario = Scenario(name="01_simple_drop")
    scenario.enable_logging()
    scenario.enable_plotting(show=False).run()

    print(f"Simulation complete. Results saved to {scenario.output_path}")


if __name__ == "__main__":
    run_example()
