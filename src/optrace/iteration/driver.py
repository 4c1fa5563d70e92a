"""Generic step-until-stop loop.

Routine Listings
----------------
iterate : function
    Apply a step function until a stop condition fires, reporting
    every value.
"""

from beartype import beartype
from beartype.typing import Any, Callable

from optrace.history import report

from .stop import StopCondition


@beartype
def iterate(
    step: Callable[[Any], Any],
    initial: Any,
    stop: StopCondition,
) -> Any:
    """Apply ``step`` until ``stop(previous, current)`` returns True.

    Similar in spirit to a ``while`` loop, with the history's display
    function threaded through every iteration. Every value, the initial
    one included, passes through ``report`` exactly once, so the
    sequence number of the current level counts the steps taken.

    Parameters
    ----------
    step : Callable[[Any], Any]
        Produces the next value from the current one.
    initial : Any
        Starting value.
    stop : StopCondition
        Called as ``stop(previous, current)`` after each new value has
        been reported.

    Returns
    -------
    final : Any
        The first value for which ``stop`` returned True.

    Notes
    -----
    There is no built-in iteration bound. A stop condition that never
    fires loops forever, so compose every condition with
    :func:`~optrace.iteration.stop.max_iterations`. Call ``iterate``
    inside :func:`~optrace.history.begin_function` so that its level
    counts only its own steps.

    Examples
    --------
    >>> def halve(x):
    ...     return x / 2
    >>> eval_history(
    ...     lambda: begin_function(
    ...         "halving", iterate, halve, 1.0, max_iterations(3)
    ...     )
    ... )
    0.125
    """
    previous: Any = report(initial)
    current: Any = step(initial)
    while True:
        report(current)
        if stop(previous, current):
            return current
        previous, current = current, step(current)
