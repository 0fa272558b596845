import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")


@pytest.fixture
def linear_pair():
    """Exact line y = 2x, the regression example from the original demo."""
    return [1.0, 2.0, 3.0, 4.0, 5.0], [2.0, 4.0, 6.0, 8.0, 10.0]


@pytest.fixture
def noisy_pair():
    rng = np.random.default_rng(42)
    x = rng.uniform(-10, 10, size=200)
    y = 3.5 * x - 1.25 + rng.normal(scale=2.0, size=200)
    return x, y
