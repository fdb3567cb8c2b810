"""Command-line entry points: closed-loop simulation and scan replay."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterator, List, Optional

from .config import MoveSpecs, SimConfig, load_move_specs
from .constants import CONFIG_NAMESPACE, NO_TARGET_X, NO_TARGET_Y
from .controllers.base import CommandEmitter, RecordingSink
from .controllers.high_level import HighLevelController
from .errors import ConfigurationError, DockNavError
from .types import ScanBundle
from .utils.config import load_config_dict

def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_sim(
    config: str,
    overrides: Optional[List[str]] = None,
    episodes: int = 1,
    seed: Optional[int] = None,
    plot: Optional[str] = None,
) -> int:
    from .sim.runner import OUTCOME_COLLISION, OUTCOME_DOCKED, run_episode
    from .sim.world import Arena

    cfg = load_config_dict(config, overrides)
    specs = load_move_specs(cfg, CONFIG_NAMESPACE)
    sim_cfg = SimConfig.from_dict(cfg.get("sim"))
    base_seed = sim_cfg.seed if seed is None else seed

    n_docked = n_collision = n_timeout = 0
    last = None
    for ep in range(episodes):
        ep_seed = None if base_seed is None else base_seed + ep
        res = run_episode(specs, sim_cfg, seed=ep_seed)
        last = res
        if res.outcome == OUTCOME_DOCKED:
            n_docked += 1
        elif res.outcome == OUTCOME_COLLISION:
            n_collision += 1
        else:
            n_timeout += 1
        print(
            f"[EP {ep + 1}/{episodes}] outcome={res.outcome} steps={res.steps} "
            f"lock_step={res.lock_step} commands={len(res.commands)}"
        )

    print(
        f"Summary: docked={n_docked} collision={n_collision} timeout={n_timeout} "
        f"success_rate={n_docked / max(1, episodes):.2f}"
    )
    if plot and last is not None:
        from .viz.plotting import save_episode_plot

        save_episode_plot(Arena.from_config(sim_cfg), last, plot)
        print(f"Saved plot to {plot}")
    return 0


def iter_bundles(path: str) -> Iterator[ScanBundle]:
    """Read scan bundles from a JSON-lines file ({"ranges": [...], "circle_x": .., "circle_y": ..})."""
    with open(path, "r") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
                yield ScanBundle(
                    rec["ranges"],
                    float(rec.get("circle_x", NO_TARGET_X)),
                    float(rec.get("circle_y", NO_TARGET_Y)),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"{path}:{line_no}: bad scan record ({exc})") from exc


def replay(config: str, scans: str, overrides: Optional[List[str]] = None, seed: Optional[int] = None) -> int:
    cfg = load_config_dict(config, overrides)
    specs: MoveSpecs = load_move_specs(cfg, CONFIG_NAMESPACE)
    sink = RecordingSink()
    ctrl = HighLevelController(specs, emitter=CommandEmitter(sink), seed=seed)
    for bundle in iter_bundles(scans):
        cmd = ctrl.on_scan(bundle)
        d = ctrl.debug
        shown = "-" if cmd is None else f"v={cmd.v:+.3f} w={cmd.w:+.3f}"
        print(f"{d['cycle']:5d} {d['mode']:<18} {d.get('branch', ''):<20} {shown}")
    print(f"Cycles: {ctrl.cycles}, commands: {len(sink.commands)}, lock_cycle: {ctrl.lock_cycle}")
    return 0


def sim_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the docking controller in the closed-loop simulator")
    parser.add_argument("--config", type=str, required=True, help="Path to YAML config")
    parser.add_argument("--episodes", type=int, default=1, help="Number of episodes")
    parser.add_argument("--seed", type=int, default=None, help="Override sim.seed")
    parser.add_argument("--plot", type=str, default=None, help="Save a plot of the last episode here")
    parser.add_argument("--log-level", type=str, default="INFO")
    parser.add_argument("overrides", nargs="*", help="Config overrides as key=value (dot paths)")
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)
    try:
        return run_sim(args.config, args.overrides, args.episodes, args.seed, args.plot)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except DockNavError as exc:
        print(f"Controller halted: {exc}", file=sys.stderr)
        return 1


def replay_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Feed recorded scan bundles through the controller")
    parser.add_argument("scans", type=str, help="JSON-lines file of scan bundles")
    parser.add_argument("--config", type=str, required=True, help="Path to YAML config")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the wall-follow side draw")
    parser.add_argument("--log-level", type=str, default="WARNING")
    parser.add_argument("overrides", nargs="*", help="Config overrides as key=value (dot paths)")
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)
    try:
        return replay(args.config, args.scans, args.overrides, args.seed)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as exc:
        print(f"Bad scan input: {exc}", file=sys.stderr)
        return 2
    except DockNavError as exc:
        print(f"Controller halted: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(sim_main())
