"""Optimizer state PyTrees for the reference optimizers.

Extended Summary
----------------
Immutable states carried through :func:`optrace.iteration.iterate` by the
optimizers in :mod:`optrace.optim`. Each state is a NamedTuple
registered as a JAX PyTree, so it can be passed through ``jax.jit``
compiled kernels and through ``report`` without conversion.

:class:`OptimizerState` exposes ``x1`` (current point) and ``fx1``
(current objective value), which makes it usable with every stop
condition in :mod:`optrace.iteration.stop`.

Routine Listings
----------------
:class:`OptimizerState`
    Current point, objective value, gradient and step size.
:class:`LineSearchState`
    Trial step size and the objective value it produces.
:func:`make_optimizer_state`
    Factory function for validated OptimizerState creation.
:func:`make_line_search_state`
    Factory function for validated LineSearchState creation.

Notes
-----
Factories convert every leaf to float64 JAX arrays. The package enables
``jax_enable_x64`` on import so the dtype is honoured.
"""

import jax.numpy as jnp
from beartype import beartype
from beartype.typing import NamedTuple, Optional, Tuple
from jax.tree_util import register_pytree_node_class
from jaxtyping import Array, Float, jaxtyped

from .common_types import ScalarFloat


@register_pytree_node_class
class OptimizerState(NamedTuple):
    """Immutable state of a first- or second-order optimizer.

    Attributes
    ----------
    x1 : Float[Array, " n"]
        Current point.
    fx1 : Float[Array, " "]
        Objective value at ``x1``.
    gradient : Float[Array, " n"]
        Gradient of the objective at ``x1``.
    step_size : Float[Array, " "]
        Step length used to reach ``x1``.
    """

    x1: Float[Array, " n"]
    fx1: Float[Array, " "]
    gradient: Float[Array, " n"]
    step_size: Float[Array, " "]

    def tree_flatten(
        self,
    ) -> Tuple[
        Tuple[
            Float[Array, " n"],
            Float[Array, " "],
            Float[Array, " n"],
            Float[Array, " "],
        ],
        None,
    ]:
        """Flatten the OptimizerState into a tuple of its components."""
        return (
            (self.x1, self.fx1, self.gradient, self.step_size),
            None,
        )

    @classmethod
    def tree_unflatten(
        cls,
        _aux_data: None,
        children: Tuple[
            Float[Array, " n"],
            Float[Array, " "],
            Float[Array, " n"],
            Float[Array, " "],
        ],
    ) -> "OptimizerState":
        """Unflatten the OptimizerState from a tuple of its components."""
        return cls(*children)


@register_pytree_node_class
class LineSearchState(NamedTuple):
    """One trial of a backtracking line search.

    Attributes
    ----------
    step_size : Float[Array, " "]
        Trial step length along the search direction.
    fx : Float[Array, " "]
        Objective value at the trial point.
    """

    step_size: Float[Array, " "]
    fx: Float[Array, " "]

    def tree_flatten(
        self,
    ) -> Tuple[Tuple[Float[Array, " "], Float[Array, " "]], None]:
        """Flatten the LineSearchState into a tuple of its components."""
        return ((self.step_size, self.fx), None)

    @classmethod
    def tree_unflatten(
        cls,
        _aux_data: None,
        children: Tuple[Float[Array, " "], Float[Array, " "]],
    ) -> "LineSearchState":
        """Unflatten the LineSearchState from a tuple of its components."""
        return cls(*children)


@jaxtyped(typechecker=beartype)
def make_optimizer_state(
    x1: Float[Array, " n"],
    fx1: ScalarFloat,
    gradient: Optional[Float[Array, " n"]] = None,
    step_size: ScalarFloat = 0.0,
) -> OptimizerState:
    """Create a validated OptimizerState instance.

    Parameters
    ----------
    x1 : Float[Array, " n"]
        Current point.
    fx1 : ScalarFloat
        Objective value at ``x1``.
    gradient : Float[Array, " n"], optional
        Gradient at ``x1``. Defaults to zeros shaped like ``x1``.
    step_size : ScalarFloat, optional
        Step length used to reach ``x1``. Default is 0.0.

    Returns
    -------
    state : OptimizerState
        State with float64 leaves.

    Raises
    ------
    ValueError
        If ``gradient`` and ``x1`` differ in shape, or ``step_size`` is
        negative.

    Examples
    --------
    >>> state = make_optimizer_state(jnp.zeros(3), 1.0)
    >>> state.gradient.shape
    (3,)
    """
    x1_arr: Float[Array, " n"] = jnp.asarray(x1, dtype=jnp.float64)
    if gradient is None:
        gradient_arr: Float[Array, " n"] = jnp.zeros_like(x1_arr)
    else:
        gradient_arr = jnp.asarray(gradient, dtype=jnp.float64)
    if gradient_arr.shape != x1_arr.shape:
        raise ValueError(
            f"gradient shape {gradient_arr.shape} does not match "
            f"x1 shape {x1_arr.shape}"
        )
    step_arr: Float[Array, " "] = jnp.asarray(step_size, dtype=jnp.float64)
    if float(step_arr) < 0.0:
        raise ValueError(f"step_size must be non-negative, got {step_size}")
    return OptimizerState(
        x1=x1_arr,
        fx1=jnp.asarray(fx1, dtype=jnp.float64),
        gradient=gradient_arr,
        step_size=step_arr,
    )


@jaxtyped(typechecker=beartype)
def make_line_search_state(
    step_size: ScalarFloat,
    fx: ScalarFloat,
) -> LineSearchState:
    """Create a validated LineSearchState instance.

    Parameters
    ----------
    step_size : ScalarFloat
        Trial step length, must be positive.
    fx : ScalarFloat
        Objective value at the trial point.

    Returns
    -------
    state : LineSearchState
        State with float64 leaves.

    Raises
    ------
    ValueError
        If ``step_size`` is not positive.
    """
    step_arr: Float[Array, " "] = jnp.asarray(step_size, dtype=jnp.float64)
    if float(step_arr) <= 0.0:
        raise ValueError(f"step_size must be positive, got {step_size}")
    return LineSearchState(
        step_size=step_arr, fx=jnp.asarray(fx, dtype=jnp.float64)
    )
