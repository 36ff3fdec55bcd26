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
    """Noisy regression dataset with three independent predictors."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.5, 1.0, -2.0, 0.5])  # intercept first
    y = beta_true[0] + X @ beta_true[1:] + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def exact_fit_data(rng):
    """Noise-free dataset: y = X beta exactly."""
    n = 30
    X = rng.standard_normal((n, 2))
    beta_true = np.array([3.0, -1.25, 0.75])
    y = beta_true[0] + X @ beta_true[1:]
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
def orthogonal_data():
    """Two centered, mutually orthogonal predictors."""
    x1 = np.array([1.0, -1.0, 1.0, -1.0, 1.0, -1.0, 1.0, -1.0])
    x2 = np.array([1.0, 1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0])
    y = np.array([3.1, 0.9, 1.2, -0.8, 2.9, 1.1, 0.8, -1.1])
    return np.column_stack([x1, x2]), y


@pytest.fixture
def spreadsheet_columns():
    """Raw spreadsheet-style columns: blanks, None, labels."""
    return {
        'sales': [12.0, 15.5, None, 19.0, 22.5, 24.0, 30.1, 28.0, ''],
        'price': [1.0, 1.5, 2.0, 2.2, 'n/a', 3.1, 4.0, 3.6, 4.4],
        'region': ['N', 'S', 'N', 'E', 'S', 'E', 'N', 'S', 'E'],
    }
