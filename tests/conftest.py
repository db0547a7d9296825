"""Pytest configuration and shared fixtures for fixpoint tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Logging and debug-mode resets between tests
"""

import logging
import os

import numpy as np
import pytest
import torch

from fixpoint.diagnostics import is_debug_enabled, set_debug_enabled
from fixpoint.logging import configure_logging


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Set global numpy and torch seeds before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_global_state():
    """Undo debug-mode and logging changes made by a test."""
    debug = is_debug_enabled()
    yield
    set_debug_enabled(debug)
    configure_logging(level=logging.WARNING)
