"""Steepest descent with a backtracking line search.

Extended Summary
----------------
Minimizes a smooth scalar objective by stepping along the negative
gradient. The step length is chosen by an Armijo backtracking line
search run in its own ``"backtracking"`` phase, so a traced run shows
the outer iterations at one depth and the line-search trials nested
below them.

Routine Listings
----------------
:func:`gradient_descent`
    Run steepest descent from a starting point.
:func:`gradient_descent_step`
    One descent step from an OptimizerState.

Notes
-----
Objective and gradient evaluations are ``jax.jit`` compiled. Reporting
happens in Python between compiled calls, never inside them.
"""

import jax
import jax.numpy as jnp
from beartype.typing import Callable, Optional, Tuple
from jaxtyping import Array, Float

from optrace.history import begin_function
from optrace.iteration import StopCondition, iterate
from optrace.types import (
    LineSearchState,
    OptimizerState,
    make_optimizer_state,
)

from .common import (
    ARMIJO_CONSTANT,
    BACKTRACK_SHRINK,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    MAX_LINE_SEARCH,
    Objective,
    backtracking_line_search,
    default_stop,
)

ValueAndGrad = Callable[
    [Float[Array, " n"]], Tuple[Float[Array, " "], Float[Array, " n"]]
]


def gradient_descent_step(
    objective: Objective,
    value_and_grad: ValueAndGrad,
    state: OptimizerState,
    step_size: float = 1.0,
    shrink: float = BACKTRACK_SHRINK,
    armijo: float = ARMIJO_CONSTANT,
    max_line_search: int = MAX_LINE_SEARCH,
) -> OptimizerState:
    """Take one steepest-descent step from ``state``.

    Must run inside a history; the line search opens a
    ``"backtracking"`` phase below the current level.
    """
    direction: Float[Array, " n"] = -state.gradient
    trial: LineSearchState = begin_function(
        "backtracking",
        backtracking_line_search,
        objective,
        state,
        direction,
        initial_step=step_size,
        shrink=shrink,
        armijo=armijo,
        max_trials=max_line_search,
    )
    x1: Float[Array, " n"] = state.x1 + trial.step_size * direction
    fx1: Float[Array, " "]
    gradient: Float[Array, " n"]
    fx1, gradient = value_and_grad(x1)
    return make_optimizer_state(x1, fx1, gradient, trial.step_size)


def gradient_descent(
    objective: Objective,
    x0: Float[Array, " n"],
    step_size: float = 1.0,
    stop: Optional[StopCondition] = None,
    shrink: float = BACKTRACK_SHRINK,
    armijo: float = ARMIJO_CONSTANT,
    max_line_search: int = MAX_LINE_SEARCH,
) -> OptimizerState:
    """Minimize ``objective`` by steepest descent starting at ``x0``.

    Parameters
    ----------
    objective : Objective
        Smooth scalar function of a 1-D parameter vector.
    x0 : Float[Array, " n"]
        Starting point.
    step_size : float, optional
        First trial step of every line search. Default is 1.0.
    stop : StopCondition, optional
        When to stop. Defaults to ``DEFAULT_MAX_ITERATIONS`` iterations
        or relative convergence to ``DEFAULT_TOLERANCE``.
    shrink : float, optional
        Line-search shrink factor. Default is 0.5.
    armijo : float, optional
        Line-search sufficient-decrease constant. Default is 1e-4.
    max_line_search : int, optional
        Maximum shrinks per line search. Default is 30.

    Returns
    -------
    final : OptimizerState
        Last iterate.

    Notes
    -----
    Runs inside a ``"gradient_descent"`` phase of the active history;
    wrap the call in :func:`~optrace.history.eval_history` or another
    run mode.

    Examples
    --------
    >>> def f(x):
    ...     return jnp.sum((x - 3.0) ** 2)
    >>> final = eval_history(lambda: gradient_descent(f, jnp.zeros(2)))
    >>> final.x1
    Array([3., 3.], dtype=float64)
    """
    objective_jit: Objective = jax.jit(objective)
    value_and_grad: ValueAndGrad = jax.jit(jax.value_and_grad(objective))
    x0_arr: Float[Array, " n"] = jnp.asarray(x0, dtype=jnp.float64)
    fx0: Float[Array, " "]
    gradient0: Float[Array, " n"]
    fx0, gradient0 = value_and_grad(x0_arr)
    initial: OptimizerState = make_optimizer_state(x0_arr, fx0, gradient0)
    if stop is None:
        stop = default_stop(DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE)

    def step(state: OptimizerState) -> OptimizerState:
        return gradient_descent_step(
            objective_jit,
            value_and_grad,
            state,
            step_size=step_size,
            shrink=shrink,
            armijo=armijo,
            max_line_search=max_line_search,
        )

    return begin_function("gradient_descent", iterate, step, initial, stop)
