"""Diagnostics and debugging utilities for fixpoint."""

from .core import assert_finite, assert_same_shape
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "assert_finite",
    "assert_same_shape",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
