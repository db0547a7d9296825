"""Distance functions consumed by stopping criteria.

A metric is any callable ``(a, b) -> float`` that is symmetric, non-negative
and zero only for equal inputs. Stopping criteria take the metric as a
constructor argument; :class:`EuclideanMetric` is the default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
import torch

from .arrays import is_tensor

Metric = Callable[[Any, Any], float]


@dataclass(frozen=True)
class EuclideanMetric:
    """L2 norm of the elementwise difference of two arrays or tensors."""

    def __call__(self, a: Any, b: Any) -> float:
        if is_tensor(a) or is_tensor(b):
            ref = a if is_tensor(a) else b
            a = torch.as_tensor(a, device=ref.device)
            b = torch.as_tensor(b, device=ref.device)
            return float(torch.linalg.vector_norm(a - b))
        diff = np.subtract(a, b)
        return float(np.linalg.norm(np.ravel(diff)))


euclidean = EuclideanMetric()


__all__ = ["EuclideanMetric", "Metric", "euclidean"]
