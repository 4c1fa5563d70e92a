"""Stop conditions for :func:`~optrace.iteration.driver.iterate`.

Extended Summary
----------------
A stop condition is a predicate ``(previous, current) -> bool`` called
inside the running history, so it may read
:func:`~optrace.history.current_iteration`. Conditions that look at
objective values require the iterates to expose ``fx1``, the objective
at the current point (see :class:`HasFx1`).

Conditions are plain callables with one shared signature; combine them
with :func:`any_of` / :func:`all_of` or with ``or`` / ``and`` inside a
lambda.

Routine Listings
----------------
:func:`max_iterations`
    Stop once the current level has seen ``n`` steps.
:func:`stop_below`
    Stop once the objective drops below a threshold.
:func:`fx1_grows`
    Stop when the objective increased between iterations.
:func:`mul_tolerance`
    Stop when successive objectives agree to a relative tolerance.
:func:`any_of`
    Stop when any of several conditions holds.
:func:`all_of`
    Stop when all of several conditions hold.
:func:`current_point`
    The ``x1`` of an iterate.
:func:`current_objective`
    The ``fx1`` of an iterate, as a float.
:class:`HasX1`
    Iterates exposing their current point.
:class:`HasFx1`
    Iterates exposing their current objective value.
MUL_TOLERANCE_EPSILON : float
    Guard added to the denominator of mul_tolerance.
"""

import math

from beartype import beartype
from beartype.typing import Any, Callable, Protocol, runtime_checkable

from optrace.history import current_iteration

StopCondition = Callable[[Any, Any], bool]

MUL_TOLERANCE_EPSILON: float = 1e-18


@runtime_checkable
class HasX1(Protocol):
    """Iterate exposing its current point as ``x1``."""

    x1: Any


@runtime_checkable
class HasFx1(Protocol):
    """Iterate exposing its current objective value as ``fx1``."""

    fx1: Any


def current_point(opt: HasX1) -> Any:
    """Current point of an iterate."""
    return opt.x1


def current_objective(opt: HasFx1) -> float:
    """Objective value of an iterate, converted to a Python float."""
    return float(opt.fx1)


@beartype
def max_iterations(n: int) -> StopCondition:
    """Stop after ``n`` iterations.

    This number is typically set fairly high (hundreds or more) and
    should be part of every stop condition to keep poorly converging
    runs from looping forever.

    Raises
    ------
    ValueError
        If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    def stop(_previous: Any, _current: Any) -> bool:
        return current_iteration() >= n

    return stop


def stop_below(threshold: float) -> StopCondition:
    """Stop as soon as the objective is below ``threshold``."""

    def stop(_previous: Any, current: HasFx1) -> bool:
        return current_objective(current) < threshold

    return stop


def fx1_grows(previous: HasFx1, current: HasFx1) -> bool:
    """Stop if the objective value grew between iterations."""
    return current_objective(previous) < current_objective(current)


def mul_tolerance(tol: float) -> StopCondition:
    """Stop when successive objective values are relatively close.

    Fires when the previous objective is finite and::

        2 * |f1 - f0| < tol * (|f1| + |f0| + MUL_TOLERANCE_EPSILON)

    On well-behaved problems this means the optimization has converged.
    """

    def stop(previous: HasFx1, current: HasFx1) -> bool:
        f0: float = current_objective(previous)
        f1: float = current_objective(current)
        if not math.isfinite(f0):
            return False
        return 2.0 * abs(f1 - f0) < tol * (
            abs(f1) + abs(f0) + MUL_TOLERANCE_EPSILON
        )

    return stop


def any_of(*conditions: StopCondition) -> StopCondition:
    """Stop when any condition holds, evaluated left to right."""

    def stop(previous: Any, current: Any) -> bool:
        return any(cond(previous, current) for cond in conditions)

    return stop


def all_of(*conditions: StopCondition) -> StopCondition:
    """Stop when every condition holds, evaluated left to right."""

    def stop(previous: Any, current: Any) -> bool:
        return all(cond(previous, current) for cond in conditions)

    return stop
