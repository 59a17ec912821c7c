"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Simple regression dataset for basic tests."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2  # Perfect collinearity
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y


@pytest.fixture
def householder_example():
    """
    Classic 5 x 3 least-squares example.

    The first three rows are the textbook QR example; y is an arbitrary
    response, so the system is overdetermined and has non-zero residuals.
    """
    X = np.array([
        [12.0, -51.0, 4.0],
        [6.0, 167.0, -68.0],
        [-4.0, 24.0, -41.0],
        [15.0, 90.0, -4.0],
        [-44.0, 11.0, 13.0],
    ])
    y = np.array([18.0, 4.0, 30.0, -19.0, -4.0])
    return X, y


@pytest.fixture
def noise_column_data(rng):
    """
    One informative predictor and one pure-noise predictor.

    The noise column is projected off span{1, x1, e} so it is exactly
    uncorrelated with y: its coefficient is zero and its p-value is one.

    Returns:
        (X, y) with X = [1, x1, noise]
    """
    n = 60
    x1 = rng.standard_normal(n)
    e = rng.standard_normal(n) * 0.5
    y = 1.0 + 3.0 * x1 + e

    basis = np.column_stack([np.ones(n), x1, e])
    raw = rng.standard_normal(n)
    coef, *_ = np.linalg.lstsq(basis, raw, rcond=None)
    noise = raw - basis @ coef

    X = np.column_stack([np.ones(n), x1, noise])
    return X, y
