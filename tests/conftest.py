import matplotlib

matplotlib.use("Agg")

import pytest

from kochflake import Point


@pytest.fixture
def origin() -> Point:
    return Point(0.0, 0.0)
