from datetime import datetime

import pytest

from clock import FixedClock


@pytest.fixture
def clock() -> FixedClock:
    """Friday 2024-05-10, 12:30:45 local time."""
    return FixedClock(datetime(2024, 5, 10, 12, 30, 45))
