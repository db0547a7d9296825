import numpy as np
import pytest
import torch

from fixpoint import (
    Direction,
    StoppingCriterion,
    UnsupportedCapabilityError,
    Update,
    fixedpoint,
)


class Counter:
    """Step function recording the iteration indices it was called with."""

    def __init__(self, increment: float = 0.0):
        self.increment = increment
        self.calls: list[int] = []

    def __call__(self, x, t):
        self.calls.append(t)
        x += self.increment


class Contraction(Update):
    def update(self, x, t=None):
        x -= 0.5 * x


class SteepestDescent(Direction):
    """Fixed-stepsize steepest descent on f(x) = 0.5 x^T A x - b^T x."""

    def __init__(self, A, b, lr):
        self.A = A
        self.b = b
        self.lr = lr

    def valdir(self, x):
        g = self.A @ x - self.b
        return 0.5 * x @ (self.A @ x) - self.b @ x, -self.lr * g


def test_identity_update_stops_at_second_check():
    for delta in (1e-12, 1e-6, 1.0):
        x = np.array([3.0, -4.0])
        step = Counter()
        x_out, t = fixedpoint(step, x, StoppingCriterion(x, delta=delta, maxiter=50))
        assert t == 2
        assert step.calls == [1]
        assert x_out is x


def test_zero_direction_leaves_state_unchanged():
    x0 = np.array([1.0, 2.0, 3.0])
    x = x0.copy()
    _, t = fixedpoint(Counter(0.0), x, StoppingCriterion(x, delta=1e-6, maxiter=5))
    assert t == 2
    np.testing.assert_array_equal(x, x0)


def test_maxiter_zero_performs_no_update():
    x = np.array([1.0])
    step = Counter(1.0)
    _, t = fixedpoint(step, x, StoppingCriterion(x, maxiter=0))
    assert t == 1
    assert step.calls == []
    assert x[0] == 1.0


def test_maxiter_caps_number_of_updates():
    x = np.array([0.0, 0.0])
    step = Counter(1.0)
    _, t = fixedpoint(step, x, StoppingCriterion(x, delta=1e-6, maxiter=3))
    assert t == 4
    assert step.calls == [1, 2, 3]
    np.testing.assert_array_equal(x, [3.0, 3.0])


def test_contraction_converges_to_zero():
    x = np.array([10.0])
    criterion = StoppingCriterion(x, delta=1e-3, maxiter=128)
    _, t = fixedpoint(Contraction(), x, criterion)
    assert abs(x[0]) < 1e-2
    assert t < criterion.maxiter
    assert criterion.converged


def test_iteration_indices_are_consecutive():
    x = np.array([0.0])
    step = Counter(1.0)
    _, t = fixedpoint(step, x, StoppingCriterion(x, maxiter=7))
    assert step.calls == list(range(1, t))


def test_already_converged_state_takes_at_most_one_step():
    A = np.array([[2.0, 0.0], [0.0, 1.0]])
    b = np.array([2.0, 1.0])
    x = np.array([1.0, 1.0])
    descent = SteepestDescent(A, b, lr=0.1)
    calls = []

    def step(x, t):
        calls.append(t)
        descent.update(x, t)

    _, t = fixedpoint(step, x)
    assert len(calls) <= 1
    assert t == 2
    np.testing.assert_array_equal(x, [1.0, 1.0])


def test_default_criterion_is_sized_to_state():
    x = np.ones((2, 2))
    step = Counter(1.0)
    _, t = fixedpoint(step, x)
    assert t == 129
    assert len(step.calls) == 128


def test_direction_is_wrapped_into_update():
    A = np.array([[4.0, 1.0], [1.0, 3.0]])
    b = np.array([1.0, 2.0])
    x = np.array([3.0, -1.0])
    criterion = StoppingCriterion(x, delta=1e-10, maxiter=1000)
    x_out, t = fixedpoint(SteepestDescent(A, b, lr=0.1), x, criterion)
    assert x_out is x
    assert criterion.converged
    np.testing.assert_allclose(x, np.linalg.solve(A, b), atol=1e-8)


def test_torch_state_is_mutated_in_place():
    x = torch.tensor([10.0, -6.0])
    ptr = x.data_ptr()
    x_out, t = fixedpoint(Contraction(), x, StoppingCriterion(x, delta=1e-4))
    assert x_out is x
    assert x.data_ptr() == ptr
    assert torch.all(x.abs() < 1e-3)
    assert t < 128


def test_step_errors_propagate_and_keep_last_state():
    def step(x, t):
        if t == 3:
            raise RuntimeError("solver failed")
        x += 1.0

    x = np.array([0.0])
    with pytest.raises(RuntimeError, match="solver failed"):
        fixedpoint(step, x)
    assert x[0] == 2.0


def test_direction_without_capability_fails_on_first_step():
    class Empty(Direction):
        pass

    x = np.array([1.0])
    with pytest.raises(UnsupportedCapabilityError, match="direction"):
        fixedpoint(Empty(), x)
    assert x[0] == 1.0


def test_custom_predicate_can_cancel_a_run():
    flag = {"cancel": False}
    criterion = StoppingCriterion(np.zeros(1), maxiter=1000)

    def isfixed(x, t):
        return criterion(x, t) or flag["cancel"]

    def step(x, t):
        x += 1.0
        if t == 5:
            flag["cancel"] = True

    x = np.zeros(1)
    _, t = fixedpoint(step, x, isfixed)
    assert t == 6
    assert x[0] == 5.0
