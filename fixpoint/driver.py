"""Fixed-point driver: iterate an update rule until a stopping criterion holds."""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from .arrays import shape_of
from .diagnostics import assert_finite, assert_same_shape, is_debug_enabled
from .logging import get_logger
from .stopping import StoppingCriterion
from .update import Direction, StepFn, Update, as_update

logger = get_logger(__name__)

Predicate = Callable[[Any, int], bool]


def fixedpoint(
    step: Union[StepFn, Update],
    x: Any,
    isfixed: Optional[Predicate] = None,
) -> tuple[Any, int]:
    """Apply ``step`` to ``x`` in place until ``isfixed(x, t)`` returns True.

    The predicate is checked before every update, starting at ``t = 1``, so a
    predicate that already holds performs no update at all. Exceptions
    raised by ``step`` or ``isfixed`` propagate unchanged, leaving ``x`` at
    its last successfully mutated value.

    Args:
        step: Update rule called as ``step(x, t)``; a :class:`Direction` is
            wrapped into ``x += direction(x, t)``.
        x: Mutable state (numpy array or torch tensor).
        isfixed: Stopping predicate called as ``isfixed(x, t)``. Defaults to a
            fresh :class:`StoppingCriterion` sized to ``x``.

    Returns:
        The same ``x`` container and the iteration index at termination.
        Convergence and hitting the iteration cap are not told apart here;
        inspect the criterion (e.g. :attr:`StoppingCriterion.converged`).
    """
    if isfixed is None:
        isfixed = StoppingCriterion(x)
    if isinstance(step, Direction):
        step = as_update(step)

    debug = is_debug_enabled()
    shape = shape_of(x)
    logger.debug("fixed-point run started (shape=%s, step=%r)", shape, step)

    t = 1
    while not isfixed(x, t):
        step(x, t)
        if debug:
            assert_same_shape(x, shape)
            assert_finite(x)
        t += 1

    logger.debug("fixed-point run terminated at t=%d", t)
    return x, t


__all__ = ["Predicate", "fixedpoint"]
