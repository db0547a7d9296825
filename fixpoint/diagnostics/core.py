"""Consistency checks on state vectors, used by the driver in debug mode."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import torch

from ..arrays import is_tensor, shape_of
from ..errors import ShapeMismatchError


def assert_same_shape(
    x: Any,
    expected: Sequence[int],
    what: str = "state",
) -> None:
    """
    Assert that ``x`` has the given shape.

    Parameters
    ----------
    x:
        Array or tensor to check.
    expected:
        Required shape.
    what:
        Name used in the error message.

    Raises
    ------
    ShapeMismatchError
        If the shapes differ.
    """
    received = shape_of(x)
    if received != tuple(expected):
        raise ShapeMismatchError(
            f"{what} has shape {received}, expected {tuple(expected)}.",
            expected=tuple(expected),
            received=received,
        )


def assert_finite(x: Any, what: str = "state") -> None:
    """
    Assert that every element of ``x`` is finite.

    Raises
    ------
    ValueError
        If ``x`` contains NaN or infinite entries.
    """
    if is_tensor(x):
        ok = bool(torch.all(torch.isfinite(x)))
    else:
        ok = bool(np.all(np.isfinite(x)))
    if not ok:
        raise ValueError(f"{what} contains non-finite values.")
