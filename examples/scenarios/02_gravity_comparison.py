"""
Example 02: Same drop on Earth, the Moon and Mars.

Compares fixed-step landing times against the adaptive reference solution.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from dropsim.api.scenario import Scenario
from dropsim.core.reference import reference_solution, vacuum_fall_time


def run_example():
    print("=" * 76)
    print(f"{'body':<8}{'landing [s]':>14}{'reference [s]':>16}{'vacuum [s]':>14}"
          f"{'impact [m/s]':>14}{'ref [m/s]':>10}")
    print("=" * 76)
    for body in ("earth", "moon", "mars"):
        scenario = Scenario(name=f"02_{body}").use_gravity(body).run(log_interval=0)
        ref = reference_solution(scenario.params)
        print(f"{body:<8}{scenario.landing_time:>14.3f}"
              f"{ref.landing_time:>16.3f}{vacuum_fall_time(scenario.params):>14.3f}"
              f"{scenario.impact_speed:>14.2f}{ref.impact_speed:>10.2f}")


if __name__ == "__main__":
    run_example()
