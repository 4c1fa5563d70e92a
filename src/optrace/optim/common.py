"""Shared pieces of the reference optimizers.

Routine Listings
----------------
backtracking_line_search : function
    Armijo backtracking along a search direction.
default_stop : function
    Iteration cap combined with relative convergence.
Objective : TypeAlias
    Scalar objective of a 1-D parameter vector.
DEFAULT_MAX_ITERATIONS : int
    Default iteration cap of gradient descent.
DEFAULT_TOLERANCE : float
    Default relative tolerance for convergence.
"""

import jax.numpy as jnp
from beartype.typing import Callable, TypeAlias
from jaxtyping import Array, Float

from optrace.display import report_text
from optrace.history import report
from optrace.iteration import (
    StopCondition,
    any_of,
    iterate,
    max_iterations,
    mul_tolerance,
)
from optrace.types import (
    LineSearchState,
    OptimizerState,
    make_line_search_state,
)

Objective: TypeAlias = Callable[[Float[Array, " n"]], Float[Array, " "]]

DEFAULT_MAX_ITERATIONS: int = 1000
DEFAULT_TOLERANCE: float = 1e-12
ARMIJO_CONSTANT: float = 1e-4
BACKTRACK_SHRINK: float = 0.5
MAX_LINE_SEARCH: int = 30


@report_text.register
def _(value: OptimizerState) -> str:
    return (
        f"fx1={float(value.fx1):.6e}, "
        f"|grad|={float(jnp.linalg.norm(value.gradient)):.3e}, "
        f"step={float(value.step_size):.3e}"
    )


@report_text.register
def _(value: LineSearchState) -> str:
    return f"step={float(value.step_size):.3e}, fx={float(value.fx):.6e}"


def default_stop(
    max_iter: int = DEFAULT_MAX_ITERATIONS, tol: float = DEFAULT_TOLERANCE
) -> StopCondition:
    """Stop after ``max_iter`` iterations or at relative convergence."""
    return any_of(max_iterations(max_iter), mul_tolerance(tol))


def backtracking_line_search(
    objective: Objective,
    state: OptimizerState,
    direction: Float[Array, " n"],
    initial_step: float = 1.0,
    shrink: float = BACKTRACK_SHRINK,
    armijo: float = ARMIJO_CONSTANT,
    max_trials: int = MAX_LINE_SEARCH,
) -> LineSearchState:
    """Shrink a step along ``direction`` until it decreases enough.

    Trial step sizes ``initial_step * shrink**k`` are tried until the
    Armijo condition holds::

        f(x + t d) <= f(x) + armijo * t * <grad f(x), d>

    or ``max_trials`` shrinks have been made. Every trial is reported at
    the current level, so call this inside its own phase.

    Parameters
    ----------
    objective : Objective
        Function being minimized.
    state : OptimizerState
        Current iterate; its gradient gives the directional slope.
    direction : Float[Array, " n"]
        Descent direction.
    initial_step : float, optional
        First trial step. Default is 1.0.
    shrink : float, optional
        Factor applied after every failed trial. Default is 0.5.
    armijo : float, optional
        Sufficient-decrease constant. Default is 1e-4.
    max_trials : int, optional
        Maximum number of shrinks. Default is 30.

    Returns
    -------
    trial : LineSearchState
        The accepted (or last) trial.
    """
    fx0: float = float(state.fx1)
    slope: float = float(jnp.vdot(state.gradient, direction))

    def evaluate(step_size: Float[Array, " "]) -> LineSearchState:
        return make_line_search_state(
            step_size, objective(state.x1 + step_size * direction)
        )

    def sufficient(trial: LineSearchState) -> bool:
        step_size: float = float(trial.step_size)
        return float(trial.fx) <= fx0 + armijo * step_size * slope

    def shrink_step(trial: LineSearchState) -> LineSearchState:
        return evaluate(trial.step_size * shrink)

    first: LineSearchState = evaluate(
        jnp.asarray(initial_step, dtype=jnp.float64)
    )
    if sufficient(first):
        return report(first)
    return iterate(
        shrink_step,
        first,
        any_of(
            lambda _previous, current: sufficient(current),
            max_iterations(max_trials),
        ),
    )
