from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from ..sim.runner import EpisodeResult
from ..sim.world import Arena


def draw_episode(arena: Arena, result: EpisodeResult, ax, status: dict | None = None):
    ax.clear()
    w_m, h_m = arena.size_m
    extent = [0.0, w_m, 0.0, h_m]
    ax.imshow(arena.obstacles, origin="lower", cmap="Greys", extent=extent)

    tx, ty = arena.target_xy
    ax.add_patch(plt.Circle((tx, ty), arena.target_radius, color="g", alpha=0.7, label="target"))

    traj = result.trajectory
    if traj.size:
        ax.plot(traj[:, 0], traj[:, 1], "b-", linewidth=1.2, label="trajectory")
        ax.plot(traj[0, 0], traj[0, 1], "bo", markersize=5)
        x, y, th = traj[-1]
        ax.arrow(x, y, 0.2 * np.cos(th), 0.2 * np.sin(th), head_width=0.08, color="b")
        # lock_step counts cycles from 1; pose after cycle k is traj[k]
        if result.lock_step is not None and result.lock_step < traj.shape[0]:
            lx, ly, _ = traj[result.lock_step]
            ax.plot(lx, ly, "r*", markersize=12, label="target lock")

    ax.set_aspect("equal")
    ax.set_xlim(extent[0], extent[1])
    ax.set_ylim(extent[2], extent[3])
    ax.set_title(f"Episode: {result.outcome} in {result.steps} steps")
    ax.legend(loc="upper left", fontsize=8)

    if status:
        lines = []
        for k, v in status.items():
            if v is None:
                continue
            if isinstance(v, float):
                v = f"{v:.2f}"
            lines.append(f"{k}: {v}")
        if lines:
            ax.text(
                0.98,
                0.02,
                "\n".join(lines),
                transform=ax.transAxes,
                ha="right",
                va="bottom",
                fontsize=8,
                bbox=dict(facecolor="white", alpha=0.7, edgecolor="none"),
            )
    return ax


def save_episode_plot(arena: Arena, result: EpisodeResult, path: str, status: dict | None = None) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_episode(arena, result, ax, status)
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
