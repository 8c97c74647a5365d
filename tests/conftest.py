import os
import sys

import pytest

# ---------------------------------------------------------------------
# Add src/ to PYTHONPATH so the tests run from a plain checkout
# ---------------------------------------------------------------------
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from field_pathfinder.obstacles import FruitOracle  # noqa: E402


class RecordingOracle(FruitOracle):
    """Fruit oracle that records every query and answers with a predicate."""

    def __init__(self, predicate=None):
        self.predicate = predicate or (lambda x, y, width: False)
        self.calls = []

    def has_obstacle(self, x, y, width):
        self.calls.append((x, y, width))
        return self.predicate(x, y, width)


@pytest.fixture
def recording_oracle():
    return RecordingOracle()


@pytest.fixture
def square_xz():
    """100 x 100 field in caller (x, z) coordinates."""
    return [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0)]


@pytest.fixture
def square_xy():
    """The same field in internal (x, y) coordinates."""
    return [(0.0, 0.0), (100.0, 0.0), (100.0, -100.0), (0.0, -100.0)]


@pytest.fixture
def oracle_factory():
    """Build a RecordingOracle from a (x, y, width) -> bool predicate."""
    return RecordingOracle
