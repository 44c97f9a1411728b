"""
Shared fixtures for the Sentinel test suite.

The app settings singleton is built at import time, so the
environment switches below must be in place before `sentinel`
is imported by any test module.
"""

import os

os.environ.setdefault("SIMULATION_ENABLED", "false")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ASSET_COUNT", "4")

import random
from typing import List

import pytest

from sentinel.models import Position
from sentinel.simulation import MotionModel

from .helpers import RecordingRedis, square


@pytest.fixture
def unit_square() -> List[Position]:
    return square(0.0, 0.0)


@pytest.fixture
def motion() -> MotionModel:
    """Deterministic motion model with no random heading drift."""
    return MotionModel(
        center=Position(lat=0.0, lng=0.0),
        spawn_radius=10.0,
        heading_change_chance=0.0,
        rng=random.Random(7),
    )


@pytest.fixture
def recording_redis() -> RecordingRedis:
    return RecordingRedis()
