"""Tests for optimizer state PyTrees in optrace.types.optim_types."""

import chex
import jax
import jax.numpy as jnp
import pytest
from jaxtyping import TypeCheckError

from optrace.types import (
    LineSearchState,
    OptimizerState,
    make_line_search_state,
    make_optimizer_state,
)


class TestMakeOptimizerState(chex.TestCase):
    """Test the make_optimizer_state factory."""

    def test_default_gradient_and_step(self) -> None:
        """Missing gradient becomes zeros, step size defaults to zero."""
        state = make_optimizer_state(jnp.ones(3), 2.0)
        chex.assert_shape(state.gradient, (3,))
        chex.assert_trees_all_close(state.gradient, jnp.zeros(3))
        chex.assert_trees_all_close(state.fx1, jnp.array(2.0))
        chex.assert_trees_all_close(state.step_size, jnp.array(0.0))

    def test_leaves_are_float64(self) -> None:
        """All leaves are converted to float64."""
        state = make_optimizer_state(
            jnp.zeros(2, dtype=jnp.float32), jnp.array(1.0), jnp.ones(2)
        )
        for leaf in jax.tree_util.tree_leaves(state):
            self.assertEqual(leaf.dtype, jnp.float64)

    def test_gradient_shape_mismatch_raises(self) -> None:
        """Gradient and point must share the dimension n."""
        with self.assertRaises(TypeCheckError):
            make_optimizer_state(jnp.zeros(3), 1.0, jnp.zeros(2))

    def test_negative_step_raises(self) -> None:
        """Negative step sizes are rejected."""
        with self.assertRaisesRegex(ValueError, "step_size"):
            make_optimizer_state(jnp.zeros(3), 1.0, step_size=-1.0)

    def test_pytree_round_trip(self) -> None:
        """OptimizerState flattens to four leaves and rebuilds."""
        state = make_optimizer_state(jnp.arange(3.0), 4.0, jnp.ones(3), 0.5)
        leaves, treedef = jax.tree_util.tree_flatten(state)
        self.assertLen(leaves, 4)
        rebuilt = jax.tree_util.tree_unflatten(treedef, leaves)
        self.assertIsInstance(rebuilt, OptimizerState)
        chex.assert_trees_all_close(rebuilt, state)

    def test_passes_through_jit(self) -> None:
        """States can be arguments and results of jitted functions."""

        @jax.jit
        def double(state: OptimizerState) -> OptimizerState:
            return jax.tree_util.tree_map(lambda leaf: 2.0 * leaf, state)

        state = make_optimizer_state(jnp.ones(2), 1.0, jnp.ones(2), 0.25)
        doubled = double(state)
        chex.assert_trees_all_close(doubled.x1, jnp.full(2, 2.0))
        chex.assert_trees_all_close(doubled.step_size, jnp.array(0.5))


class TestMakeLineSearchState(chex.TestCase):
    """Test the make_line_search_state factory."""

    def test_valid_state(self) -> None:
        """Positive steps are accepted."""
        state = make_line_search_state(0.5, jnp.array(3.0))
        self.assertIsInstance(state, LineSearchState)
        chex.assert_trees_all_close(state.step_size, jnp.array(0.5))
        chex.assert_trees_all_close(state.fx, jnp.array(3.0))

    def test_non_positive_step_raises(self) -> None:
        """Zero step size is rejected."""
        with self.assertRaisesRegex(ValueError, "positive"):
            make_line_search_state(0.0, 1.0)


if __name__ == "__main__":
    pytest.main([__file__])
