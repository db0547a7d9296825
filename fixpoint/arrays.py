"""Helpers for the two supported state containers: numpy arrays and torch tensors."""

from __future__ import annotations

from typing import Any, Union

import numpy as np
import torch

from .errors import ShapeMismatchError

State = Union[np.ndarray, torch.Tensor]


def is_tensor(x: Any) -> bool:
    """Return True if ``x`` is a torch tensor."""
    return isinstance(x, torch.Tensor)


def shape_of(x: Any) -> tuple[int, ...]:
    """Return the shape of ``x`` as a plain tuple."""
    if is_tensor(x):
        return tuple(x.shape)
    return tuple(np.shape(x))


def full_like(x: Any, fill_value: float) -> State:
    """Return a new floating-point container shaped like ``x`` filled with ``fill_value``.

    Tensors keep their device. Floating and complex inputs keep their dtype;
    integer and bool inputs get float64 so that ``inf`` can be stored.
    """
    if is_tensor(x):
        dtype = x.dtype if (x.is_floating_point() or x.is_complex()) else torch.float64
        return torch.full(tuple(x.shape), fill_value, dtype=dtype, device=x.device)
    dtype = np.asarray(x).dtype
    if not np.issubdtype(dtype, np.inexact):
        dtype = np.dtype(np.float64)
    return np.full(np.shape(x), fill_value, dtype=dtype)


def copy_into(dst: State, src: Any) -> None:
    """Overwrite ``dst`` elementwise with the values of ``src``."""
    if is_tensor(dst):
        with torch.no_grad():
            dst.copy_(torch.as_tensor(src, dtype=dst.dtype, device=dst.device))
    else:
        np.copyto(dst, np.asarray(src))


def add_inplace(x: State, increment: Any) -> None:
    """Compute ``x += increment`` in place.

    Raises
    ------
    TypeError
        If ``x`` is neither a numpy array nor a torch tensor.
    ShapeMismatchError
        If ``increment`` does not have the shape of ``x``.
    """
    if shape_of(increment) != shape_of(x):
        raise ShapeMismatchError(
            f"increment has shape {shape_of(increment)}, state has shape {shape_of(x)}.",
            expected=shape_of(x),
            received=shape_of(increment),
        )
    if is_tensor(x):
        with torch.no_grad():
            x.add_(torch.as_tensor(increment, dtype=x.dtype, device=x.device))
    elif isinstance(x, np.ndarray):
        np.add(x, increment, out=x)
    else:
        raise TypeError(
            f"State must be a numpy.ndarray or torch.Tensor to be updated in place, "
            f"got {type(x).__name__}."
        )


__all__ = ["State", "add_inplace", "copy_into", "full_like", "is_tensor", "shape_of"]
