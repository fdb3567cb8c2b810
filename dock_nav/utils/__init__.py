"""Utility helpers shared by the controller, the simulator and the scripts."""

from .config import load_config_dict, load_config_any

__all__ = [
    "load_config_dict",
    "load_config_any",
]
