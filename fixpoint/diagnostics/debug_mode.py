"""Debug mode management for fixpoint."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional, Union

from ..logging import get_log_level, set_log_level

_DEBUG_ENV_VAR = "FIXPOINT_DEBUG"
_debug_enabled: bool = os.getenv(_DEBUG_ENV_VAR, "0").lower() in (
    "1",
    "true",
    "yes",
    "on",
)


def is_debug_enabled() -> bool:
    """
    Return whether debug mode is currently enabled.

    Debug mode can be toggled via set_debug_enabled(...) or the
    FIXPOINT_DEBUG environment variable. While it is on, the driver checks
    the state after every update step.

    Returns
    -------
    bool
        True if debug mode is enabled, False otherwise.
    """
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(
    enabled: bool = True,
    log_level: Optional[Union[int, str]] = None,
) -> Iterator[None]:
    """
    Context manager to temporarily enable or disable debug mode.

    Parameters
    ----------
    enabled:
        Whether to enable debug mode within the context.
    log_level:
        Level applied to all fixpoint loggers within the context, e.g.
        ``"DEBUG"`` to see every run start and stop. The previous level is
        restored on exit. None leaves logging untouched.

    Example
    -------
    >>> with debug_context(True, log_level="DEBUG"):
    ...     x, t = fixedpoint(step, x)
    """
    global _debug_enabled
    prev = _debug_enabled
    prev_level = get_log_level()
    _debug_enabled = bool(enabled)
    if log_level is not None:
        set_log_level(log_level)
    try:
        yield
    finally:
        _debug_enabled = prev
        if log_level is not None:
            set_log_level(prev_level)
