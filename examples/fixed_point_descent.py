"""
Example: Descent methods as fixed-point iterations

This example shows how concrete algorithms plug into the fixpoint driver:
a least-squares steepest descent that only implements the fused
value/direction computation, a heavy-ball method written as a
time-dependent direction, and a plain update rule on a torch tensor.
"""

import logging

import numpy as np
import torch

from fixpoint import (
    Direction,
    StoppingConfig,
    TimeDependentDirection,
    Update,
    fixedpoint,
    objective,
)
from fixpoint.logging import configure_logging


class LeastSquaresDescent(Direction):
    """Steepest descent on 0.5 |A x - b|^2 with a fixed stepsize."""

    def __init__(self, A, b, lr):
        self.A = A
        self.b = b
        self.lr = lr

    def f(self, x):
        r = self.A @ x - self.b
        return 0.5 * float(r @ r)

    def valdir(self, x):
        # residual shared by value and gradient
        r = self.A @ x - self.b
        return 0.5 * float(r @ r), -self.lr * (self.A.T @ r)


class HeavyBall(TimeDependentDirection):
    """Gradient step plus momentum, with the momentum switched on after the first step."""

    def __init__(self, grad, lr=0.05, beta=0.8):
        self.grad = grad
        self.lr = lr
        self.beta = beta
        self.velocity = None

    def direction(self, x, t=None):
        if self.velocity is None or t == 1:
            self.velocity = np.zeros_like(x)
        self.velocity = self.beta * self.velocity - self.lr * self.grad(x)
        return self.velocity


class Average(Update):
    """Babylonian square-root iteration x <- (x + a / x) / 2."""

    def __init__(self, a):
        self.a = a

    def update(self, x, t=None):
        x.copy_(0.5 * (x + self.a / x))


def example_least_squares():
    print("=" * 60)
    print("Example 1: Least squares through the fused value/direction path")
    print("=" * 60)

    rng = np.random.default_rng(0)
    A = rng.normal(size=(20, 3))
    x_true = np.array([1.0, -2.0, 0.5])
    b = A @ x_true

    strategy = LeastSquaresDescent(A, b, lr=0.02)
    x = np.zeros(3)
    criterion = StoppingConfig(delta=1e-10, maxiter=5000).build(x)
    x, t = fixedpoint(strategy, x, criterion)

    print(f"Iterations: {t}")
    print(f"Converged: {criterion.converged}")
    print(f"Solution: {x}")
    print(f"Objective: {objective(strategy, x):.3e}")
    print()


def example_heavy_ball():
    print("=" * 60)
    print("Example 2: Heavy-ball momentum as a time-dependent direction")
    print("=" * 60)

    H = np.diag([1.0, 10.0])

    x = np.array([5.0, 5.0])
    criterion = StoppingConfig(delta=1e-9, maxiter=1000).build(x)
    x, t = fixedpoint(HeavyBall(lambda x: H @ x), x, criterion)

    print(f"Iterations: {t}")
    print(f"Converged: {criterion.converged}")
    print(f"Solution: {x}")
    print()


def example_torch_state():
    print("=" * 60)
    print("Example 3: Plain update rule on a torch tensor")
    print("=" * 60)

    x = torch.full((3,), 1.0, dtype=torch.float64)
    a = torch.tensor([2.0, 9.0, 10.0], dtype=torch.float64)
    x, t = fixedpoint(Average(a), x)

    print(f"Iterations: {t}")
    print(f"sqrt(a): {x.tolist()}")
    print()


if __name__ == "__main__":
    configure_logging(level=logging.INFO)
    example_least_squares()
    example_heavy_ball()
    example_torch_state()
