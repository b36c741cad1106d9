from __future__ import annotations
import math
import os
from typing import Iterable, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from dropsim.core.reference import vacuum_fall_time, vacuum_impact_speed
from dropsim.dynamics.forces import terminal_velocity
from dropsim.dynamics.state import DataPoint, SimulationParams


def chart_limits(params: SimulationParams) -> Tuple[float, float]:
    """
    Fixed axis limits for a speed-vs-time chart of this drop.

    Returns
    -------
    t_max : float
        Time axis upper bound [s]: 1.5x the vacuum fall time, at least 5 s,
        rounded up to a whole second.
    speed_max : float
        Speed axis upper bound [m/s]: room for the terminal velocity (or the
        vacuum impact speed when drag-free) but never above 1.1x the vacuum
        impact speed.

    Notes
    -----
    Limits depend only on params, so the axes do not rescale while the
    trajectory grows.
    """
    v_vac = vacuum_impact_speed(params)
    vt = terminal_velocity(params)
    if vt is None:
        vt = v_vac
    speed_max = min(v_vac * 1.1, max(vt * 1.2, 10.0))
    t_max = float(math.ceil(max(5.0, vacuum_fall_time(params) * 1.5)))
    return t_max, speed_max


def _columns(history: Iterable[DataPoint]) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    points = list(history)
    if not points:
        raise ValueError("History is empty. Nothing to plot.")
    data = np.array(
        [(p.time, p.position, p.velocity, p.acceleration) for p in points],
        dtype=float,
    )
    return data[:, 0], data[:, 1], data[:, 2], data[:, 3]


def _finish(fig: Figure, save_path: str | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=180, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def plot_speed(
    history: Iterable[DataPoint],
    params: SimulationParams,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot speed |v| against time with the terminal velocity reference line.

    Parameters
    ----------
    history : Iterable[DataPoint]
        Trajectory samples, e.g. ``stepper.history``
    params : SimulationParams
        Parameters of the run; fix the axis limits and terminal velocity
    save_path : str | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().

    Returns
    -------
    fig : Figure
    """
    t, _, v, _ = _columns(history)
    t_max, speed_max = chart_limits(params)

    fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    ax.plot(t, np.abs(v), label="|v|", color="#1a73e8", lw=2.0)

    vt = terminal_velocity(params)
    if vt is not None:
        ax.axhline(vt, color="#ea4335", ls="--", lw=1.5,
                   label=f"Terminal vel: {vt:.1f} m/s")

    ax.set_xlim(0.0, max(t_max, float(t[-1])))
    ax.set_ylim(0.0, speed_max)
    ax.set_xlabel("t [s]"); ax.set_ylabel("speed [m/s]")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    ax.set_title("Speed vs time")
    return _finish(fig, save_path, show)


def plot_kinematics(
    history: Iterable[DataPoint],
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot position, velocity and acceleration against time.

    Returns
    -------
    fig : Figure
    """
    t, y, v, a = _columns(history)

    fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)

    axes[0].plot(t, y, color="#1a73e8", lw=2)
    axes[0].set_ylabel("height [m]")
    axes[0].set_title("Height")

    axes[1].plot(t, v, color="#34a853", lw=2)
    axes[1].set_ylabel("velocity [m/s]")
    axes[1].set_title("Velocity")

    axes[2].plot(t, a, color="#fbbc05", lw=2)
    axes[2].set_ylabel("accel [m/s²]")
    axes[2].set_xlabel("t [s]")
    axes[2].set_title("Acceleration")

    for ax in axes:
        ax.grid(True, alpha=0.3)
    return _finish(fig, save_path, show)
