"""Closed-loop simulator used to exercise the controller off the robot."""

from .drive import DriveBase
from .runner import EpisodeResult, run_episode
from .scanner import RingScanner
from .world import Arena

__all__ = [
    "Arena",
    "DriveBase",
    "EpisodeResult",
    "RingScanner",
    "run_episode",
]
