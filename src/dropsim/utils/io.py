# src/dropsim/utils/io.py
import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from dropsim.dynamics.state import DEFAULT_PARAMS, GRAVITY_PRESETS, DataPoint, SimulationParams
from dropsim.utils.validation import validate_params

HISTORY_COLUMNS = ["time", "position", "velocity", "acceleration"]


def history_to_frame(history: Iterable[DataPoint]) -> pd.DataFrame:
    """
    Convert trajectory samples to a DataFrame.

    Columns are time, position, velocity, acceleration, plus speed (|velocity|).
    """
    df = pd.DataFrame(
        [(p.time, p.position, p.velocity, p.acceleration) for p in history],
        columns=HISTORY_COLUMNS,
    )
    df["speed"] = df["velocity"].abs()
    return df


def save_history(history: Iterable[DataPoint], filepath: str | Path) -> Path:
    """
    Saves trajectory samples to a CSV file.

    Args:
        history: Samples, e.g. ``stepper.history``
        filepath: Destination path (e.g., 'results/run1.csv')
    """
    df = history_to_frame(history)
    if df.empty:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(path, index=False)
    print(f"Simulation results saved to {path.absolute()}")
    return path


def params_from_dict(data: dict[str, Any], base: SimulationParams = DEFAULT_PARAMS) -> SimulationParams:
    """
    Apply overrides to ``base`` and validate the result.

    A string ``gravity`` is looked up in GRAVITY_PRESETS (e.g. "moon").
    """
    known = {f.name for f in fields(SimulationParams)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown parameters: {sorted(unknown)}. Valid options: {sorted(known)}")

    changes = dict(data)
    gravity = changes.get("gravity")
    if isinstance(gravity, str):
        try:
            changes["gravity"] = GRAVITY_PRESETS[gravity.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown gravity preset '{gravity}'. Valid options: {sorted(GRAVITY_PRESETS)}"
            ) from None

    params = base.replace(**{k: float(v) for k, v in changes.items()})
    validate_params(params)
    return params


def load_params(filepath: str | Path) -> SimulationParams:
    """
    Load simulation parameters from a JSON file.

    The file holds an object of overrides on top of DEFAULT_PARAMS, e.g.
    ``{"height": 500, "gravity": "mars"}``.
    """
    path = Path(filepath)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    return params_from_dict(data)
