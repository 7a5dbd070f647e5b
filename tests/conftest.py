"""Shared fixtures for S&P 500 Return Analyzer tests."""

import numpy as np
import pytest

from tests.helpers import make_series


@pytest.fixture
def random_walk_series():
    """Generate 2000 days of positive random-walk prices."""
    rng = np.random.default_rng(42)
    close = 100 * np.exp(np.cumsum(rng.normal(0.0003, 0.01, 2000)))
    return make_series(close)

