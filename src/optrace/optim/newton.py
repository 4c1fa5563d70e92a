"""Newton-Raphson minimization.

Extended Summary
----------------
Second-order minimization using the exact Hessian from
``jax.hessian``. Each step solves ``H d = -g`` and moves by the full
Newton step, which converges quadratically near a non-degenerate
minimum but is not globalized.

Routine Listings
----------------
:func:`newton_direction`
    Solve the Newton system for the search direction.
:func:`newton_raphson`
    Run Newton-Raphson from a starting point.
"""

import jax
import jax.numpy as jnp
from beartype import beartype
from beartype.typing import Callable, Optional
from jaxtyping import Array, Float, jaxtyped

from optrace.history import begin_function
from optrace.iteration import StopCondition, iterate
from optrace.types import OptimizerState, make_optimizer_state

from .common import DEFAULT_TOLERANCE, Objective, default_stop

NEWTON_MAX_ITERATIONS: int = 100


@jax.jit
@jaxtyped(typechecker=beartype)
def newton_direction(
    gradient: Float[Array, " n"],
    hessian: Float[Array, " n n"],
) -> Float[Array, " n"]:
    """Solve ``hessian @ d = -gradient`` for the Newton direction d."""
    direction: Float[Array, " n"] = -jnp.linalg.solve(hessian, gradient)
    return direction


def newton_raphson(
    objective: Objective,
    x0: Float[Array, " n"],
    stop: Optional[StopCondition] = None,
) -> OptimizerState:
    """Minimize ``objective`` with full Newton steps starting at ``x0``.

    Parameters
    ----------
    objective : Objective
        Twice-differentiable scalar function of a 1-D vector.
    x0 : Float[Array, " n"]
        Starting point.
    stop : StopCondition, optional
        When to stop. Defaults to ``NEWTON_MAX_ITERATIONS`` iterations
        or relative convergence to ``DEFAULT_TOLERANCE``.

    Returns
    -------
    final : OptimizerState
        Last iterate, reported inside a ``"newton_raphson"`` phase.
    """
    value_and_grad: Callable = jax.jit(jax.value_and_grad(objective))
    hessian_fn: Callable = jax.jit(jax.hessian(objective))
    x0_arr: Float[Array, " n"] = jnp.asarray(x0, dtype=jnp.float64)
    fx0, gradient0 = value_and_grad(x0_arr)
    initial: OptimizerState = make_optimizer_state(x0_arr, fx0, gradient0)
    if stop is None:
        stop = default_stop(NEWTON_MAX_ITERATIONS, DEFAULT_TOLERANCE)

    def step(state: OptimizerState) -> OptimizerState:
        direction: Float[Array, " n"] = newton_direction(
            state.gradient, hessian_fn(state.x1)
        )
        x1: Float[Array, " n"] = state.x1 + direction
        fx1, gradient = value_and_grad(x1)
        return make_optimizer_state(x1, fx1, gradient, 1.0)

    return begin_function("newton_raphson", iterate, step, initial, stop)
