"""Scalar type aliases shared across optrace.

Extended Summary
----------------
Type aliases for scalar values that may arrive either as plain Python
numbers or as zero-dimensional JAX arrays. Used by the optimizer
PyTrees and their factory functions.

Routine Listings
----------------
NonJaxNumber : TypeAlias
    Python numeric scalar.
ScalarBool : TypeAlias
    Python or JAX boolean scalar.
ScalarFloat : TypeAlias
    Python or JAX floating-point scalar.
ScalarInteger : TypeAlias
    Python or JAX integer scalar.
ScalarNumeric : TypeAlias
    Any of the numeric scalar aliases.
"""

from beartype.typing import TypeAlias, Union
from jaxtyping import Array, Bool, Float, Int, Num

NonJaxNumber: TypeAlias = Union[int, float]
ScalarBool: TypeAlias = Union[bool, Bool[Array, " "]]
ScalarFloat: TypeAlias = Union[float, Float[Array, " "]]
ScalarInteger: TypeAlias = Union[int, Int[Array, " "]]
ScalarNumeric: TypeAlias = Union[int, float, Num[Array, " "]]
