import numpy as np
import pytest

from dock_nav.config import MoveSpecs


def base_params() -> dict:
    return {
        "high_security_distance": 0.5,
        "low_security_distance": 0.3,
        "wall_follow_distance": 0.6,
        "linear_velocity": 0.25,
        "angular_velocity": 0.8,
        "right_range_low_lim": 240,
        "right_range_high_lim": 330,
        "left_range_low_lim": 390,
        "left_range_high_lim": 480,
        "center_range_low_lim": 330,
        "center_range_high_lim": 390,
    }


@pytest.fixture
def params() -> dict:
    return base_params()


@pytest.fixture
def specs() -> MoveSpecs:
    return MoveSpecs.from_dict(base_params())


@pytest.fixture
def open_scan() -> np.ndarray:
    """720-beam scan with nothing closer than 3 m."""
    return np.full(720, 3.0)
