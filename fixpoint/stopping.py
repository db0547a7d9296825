"""Stopping criteria for fixed-point iterations.

A stopping criterion is a *stateful* predicate ``(x, t) -> bool``. Each call
compares the current state with the state seen by the previous call and then
overwrites its snapshot with the current state, whatever the outcome. The
comparison is therefore always against the previous iterate, one step
behind. Do not turn it into a pure function: the driver relies on the
snapshot being refreshed on every call, including calls returning False.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .arrays import State, copy_into, full_like, shape_of
from .errors import ShapeMismatchError
from .logging import get_logger
from .metrics import Metric, euclidean

logger = get_logger(__name__)

DEFAULT_DELTA = 1e-6
DEFAULT_MAXITER = 128


class StoppingCriterion:
    """
    Halts when the state stops moving or the iteration cap is exceeded.

    A call ``criterion(x, t)`` returns ``metric(x, last_x) < delta or
    t > maxiter`` and then copies ``x`` into the snapshot. The snapshot
    starts as ``+inf`` everywhere, so the first call never reports
    convergence through the distance test.

    Args:
        x: State the run starts from; only its shape, dtype and device are used.
        delta: Minimum absolute change between consecutive iterates. Must be
            positive.
        maxiter: Largest iteration index that may still run an update. Zero
            stops a run before the first update.
        metric: Distance between two states. Defaults to the Euclidean metric.

    Attributes:
        x: Snapshot of the state seen by the previous call.
        last_distance: Distance computed by the latest call (``inf`` before
            the first call).
    """

    def __init__(
        self,
        x: Any,
        delta: float = DEFAULT_DELTA,
        maxiter: int = DEFAULT_MAXITER,
        metric: Optional[Metric] = None,
    ) -> None:
        if not delta > 0:
            raise ValueError(f"delta must be positive, got {delta}.")
        if int(maxiter) != maxiter or maxiter < 0:
            raise ValueError(f"maxiter must be a non-negative integer, got {maxiter}.")
        self.x: State = full_like(x, math.inf)
        self.delta = float(delta)
        self.maxiter = int(maxiter)
        self.metric: Metric = metric if metric is not None else euclidean
        self.last_distance = math.inf

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape every state passed to this criterion must have."""
        return shape_of(self.x)

    @property
    def converged(self) -> bool:
        """True if the latest call saw a change smaller than ``delta``."""
        return self.last_distance < self.delta

    def __call__(self, x: Any, t: int) -> bool:
        if shape_of(x) != self.shape:
            raise ShapeMismatchError(
                f"State has shape {shape_of(x)} but the stopping criterion was built "
                f"for shape {self.shape}.",
                expected=self.shape,
                received=shape_of(x),
            )
        self.last_distance = self.metric(x, self.x)
        stop = self.last_distance < self.delta or t > self.maxiter
        copy_into(self.x, x)
        if stop:
            logger.debug(
                "stopping at t=%d (distance=%.3e, delta=%.3e, maxiter=%d)",
                t,
                self.last_distance,
                self.delta,
                self.maxiter,
            )
        return stop

    def __repr__(self) -> str:
        return (
            f"StoppingCriterion(shape={self.shape}, delta={self.delta}, "
            f"maxiter={self.maxiter}, metric={self.metric!r})"
        )


@dataclass(frozen=True)
class StoppingConfig:
    """
    Parameters of the default stopping criterion.

    Args:
        delta: Minimum absolute change in the state for termination.
        maxiter: Maximum number of update steps.
    """

    delta: float = DEFAULT_DELTA
    maxiter: int = DEFAULT_MAXITER

    def build(self, x: Any, metric: Optional[Metric] = None) -> StoppingCriterion:
        """Create a fresh criterion for a run starting from ``x``."""
        return StoppingCriterion(x, delta=self.delta, maxiter=self.maxiter, metric=metric)


def make_stopping_criterion(
    x: Any,
    delta: float = DEFAULT_DELTA,
    maxiter: int = DEFAULT_MAXITER,
    metric: Optional[Metric] = None,
) -> StoppingCriterion:
    """Construct the default stopping criterion sized to ``x``."""
    return StoppingCriterion(x, delta=delta, maxiter=maxiter, metric=metric)


__all__ = [
    "DEFAULT_DELTA",
    "DEFAULT_MAXITER",
    "StoppingConfig",
    "StoppingCriterion",
    "make_stopping_criterion",
]
