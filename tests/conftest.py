"""Pytest configuration and shared fixtures for linopt tests.

This module provides:
- A deterministic NumPy RNG fixture
- Well-conditioned random matrix fixtures for decomposition tests
"""

import os

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def well_conditioned(rng: np.random.Generator):
    """Factory for diagonally dominant (hence invertible) n x n arrays."""

    def make(n: int) -> np.ndarray:
        a = rng.uniform(-1.0, 1.0, size=(n, n))
        return a + (n + 1) * np.eye(n)

    return make


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the legacy global numpy RNG for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))
