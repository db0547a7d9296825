"""fixpoint - optimization problems solved as fixed-point iterations.

Example
-------
>>> import numpy as np
>>> from fixpoint import Direction, StoppingCriterion, fixedpoint
>>> class HalfStep(Direction):
...     def direction(self, x):
...         return -0.5 * x
>>> x = np.array([10.0])
>>> x, t = fixedpoint(HalfStep(), x, StoppingCriterion(x, delta=1e-3))
>>> bool(abs(x[0]) < 1e-2)
True
"""

__version__ = "0.1.0"

from .driver import Predicate, fixedpoint
from .errors import FixpointError, ShapeMismatchError, UnsupportedCapabilityError
from .metrics import EuclideanMetric, Metric, euclidean
from .stopping import (
    DEFAULT_DELTA,
    DEFAULT_MAXITER,
    StoppingConfig,
    StoppingCriterion,
    make_stopping_criterion,
)
from .update import (
    Direction,
    StepFn,
    TimeDependentDirection,
    Update,
    as_update,
    direction,
    objective,
    update,
    valdir,
    value,
    valuedirection,
)

__all__ = [
    "DEFAULT_DELTA",
    "DEFAULT_MAXITER",
    "Direction",
    "EuclideanMetric",
    "FixpointError",
    "Metric",
    "Predicate",
    "ShapeMismatchError",
    "StepFn",
    "StoppingConfig",
    "StoppingCriterion",
    "TimeDependentDirection",
    "UnsupportedCapabilityError",
    "Update",
    "as_update",
    "direction",
    "euclidean",
    "fixedpoint",
    "make_stopping_criterion",
    "objective",
    "update",
    "valdir",
    "value",
    "valuedirection",
]
