"""Update and direction strategies.

Every algorithm plugs into :func:`fixpoint.driver.fixedpoint` through one of
two abstract base classes:

``Update``
    Mutates the state in place: ``strategy.update(x, t)``. Time-independent
    updates simply ignore ``t``.

``Direction``
    A refinement of ``Update`` that computes a vector ``d`` shaped like ``x``;
    its update is ``x += d``. Directions are descent directions: a caller who
    wants to ascend negates the step. Directions are time-independent by
    convention; :class:`TimeDependentDirection` is the exception for
    schedule-driven methods such as momentum read as a direction.

A strategy may also expose its objective (``objective``) and a fused
computation of ``(objective value, direction)`` (``valdir``) for when both
share intermediate work such as a gradient evaluation. A direction that only
implements ``valdir`` gets ``direction`` for free: the default calls
``valdir`` and drops the value.

The module-level functions :func:`update`, :func:`direction`,
:func:`objective` and :func:`valuedirection` are the dispatch points used by
the driver and by collaborators such as line searches.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .arrays import add_inplace
from .diagnostics import assert_finite, is_debug_enabled
from .errors import UnsupportedCapabilityError

StepFn = Callable[[Any, int], Any]
Objective = Callable[[Any], float]


class Update(ABC):
    """Strategy that mutates the state in place."""

    @abstractmethod
    def update(self, x: Any, t: Optional[int] = None) -> None:
        """Apply one step to ``x`` in place; ``t`` is the 1-based iteration index."""

    def __call__(self, x: Any, t: Optional[int] = None) -> Any:
        return self.update(x, t)

    def objective(self, x: Any) -> float:
        """Evaluate the objective at ``x``.

        The default evaluates a callable ``f`` attribute, the conventional
        place for a strategy to keep its objective function.
        """
        f = getattr(self, "f", None)
        if not callable(f):
            raise UnsupportedCapabilityError("objective", self)
        return f(x)


class Direction(Update):
    """Strategy producing a descent direction; its update is ``x += direction(x)``.

    Subclasses override :meth:`direction`, :meth:`valdir`, or both. Overriding
    only :meth:`valdir` is sufficient.
    """

    time_dependent = False

    def direction(self, x: Any) -> Any:
        """Return the direction at ``x``, a vector shaped like ``x``."""
        if type(self).valdir is Direction.valdir:
            raise UnsupportedCapabilityError("direction", self)
        return self.valdir(x)[1]

    def valdir(self, x: Any) -> tuple[float, Any]:
        """Return ``(objective value, direction)`` at ``x`` in one computation."""
        raise UnsupportedCapabilityError("valdir", self)

    def update(self, x: Any, t: Optional[int] = None) -> None:
        d = direction(self, x, t)
        if is_debug_enabled():
            assert_finite(d, what="direction")
        add_inplace(x, d)

    def __call__(self, x: Any, t: Optional[int] = None) -> Any:
        return direction(self, x, t)


class TimeDependentDirection(Direction):
    """Direction that depends on the iteration index, e.g. a momentum scheme.

    Subclasses must implement ``direction(x, t)``. The fused ``valdir`` keeps
    its time-independent signature; strategies needing ``t`` there should
    override :meth:`direction` directly.
    """

    time_dependent = True

    @abstractmethod
    def direction(self, x: Any, t: Optional[int] = None) -> Any:
        """Return the direction at ``x`` for iteration ``t``."""


def update(strategy: Any, x: Any, t: Optional[int] = None) -> Any:
    """Apply ``strategy`` to ``x`` in place.

    Plain callables are treated as step functions ``f(x, t)``.
    """
    if isinstance(strategy, Update):
        return strategy.update(x, t)
    if callable(strategy):
        return strategy(x, t)
    raise UnsupportedCapabilityError("update", strategy)


def direction(strategy: Any, x: Any, t: Optional[int] = None) -> Any:
    """Return the direction of ``strategy`` at ``x``.

    The iteration index is only forwarded to time-dependent directions; all
    other directions are evaluated as ``strategy.direction(x)``.
    """
    if not isinstance(strategy, Direction):
        raise UnsupportedCapabilityError("direction", strategy)
    if strategy.time_dependent:
        if t is None:
            raise ValueError(
                f"{type(strategy).__name__} is time-dependent and needs an iteration index."
            )
        return strategy.direction(x, t)
    return strategy.direction(x)


def objective(strategy: Any, x: Any = None) -> Any:
    """Evaluate the objective of ``strategy`` at ``x``.

    Without ``x``, returns the objective as a unary function of the state so
    that line searches can query it without direction information.
    """
    if x is None:
        return lambda y: objective(strategy, y)
    if not isinstance(strategy, Update):
        raise UnsupportedCapabilityError("objective", strategy)
    return strategy.objective(x)


value = objective


def valuedirection(strategy: Any, x: Any = None) -> Any:
    """Return ``(objective value, direction)`` of ``strategy`` at ``x``.

    Without ``x``, returns the fused computation as a unary function.
    """
    if x is None:
        return lambda y: valuedirection(strategy, y)
    if not isinstance(strategy, Direction):
        raise UnsupportedCapabilityError("valdir", strategy)
    return strategy.valdir(x)


valdir = valuedirection


def as_update(d: Direction) -> StepFn:
    """Turn a direction into a step function ``(x, t) -> None`` computing ``x += d(x, t)``."""
    if not isinstance(d, Direction):
        raise TypeError(f"as_update expects a Direction, got {type(d).__name__}.")

    def step(x: Any, t: int) -> None:
        d.update(x, t)

    return step


__all__ = [
    "Direction",
    "Objective",
    "StepFn",
    "TimeDependentDirection",
    "Update",
    "as_update",
    "direction",
    "objective",
    "update",
    "valdir",
    "value",
    "valuedirection",
]
