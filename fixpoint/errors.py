"""Exception classes raised by fixpoint.

Reaching the iteration cap is not an error: the driver returns normally and
callers inspect the stopping criterion to find out why the run ended.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class FixpointError(Exception):
    """Base exception class for fixpoint errors."""

    pass


class ShapeMismatchError(FixpointError, ValueError):
    """Raised when a state vector does not have the shape fixed for the run."""

    def __init__(
        self,
        message: str,
        expected: Optional[Sequence[int]] = None,
        received: Optional[Sequence[int]] = None,
    ):
        """Initialize ShapeMismatchError.

        Args:
            message: Error description.
            expected: Shape recorded when the run started.
            received: Shape actually seen.
        """
        super().__init__(message)
        self.expected = tuple(expected) if expected is not None else None
        self.received = tuple(received) if received is not None else None


class UnsupportedCapabilityError(FixpointError, NotImplementedError):
    """Raised when a strategy is asked for an operation it does not implement."""

    def __init__(self, operation: str, strategy: Any = None):
        """Initialize UnsupportedCapabilityError.

        Args:
            operation: Name of the missing operation (``"direction"``,
                ``"objective"``, ``"valdir"``, ``"update"``).
            strategy: The strategy the operation was requested from.
        """
        owner = type(strategy).__name__ if strategy is not None else "strategy"
        super().__init__(f"{owner} does not implement '{operation}'.")
        self.operation = operation
        self.strategy = strategy


__all__ = ["FixpointError", "ShapeMismatchError", "UnsupportedCapabilityError"]
