"""Type definitions and factory functions for optrace.

Extended Summary
----------------
Core records of the instrumentation engine (reports and accumulator
descriptions), scalar type aliases, and the PyTree states used by the
reference optimizers.

Routine Listings
----------------
:func:`make_report`
    Factory function for Report creation.
:func:`make_optimizer_state`
    Factory function for OptimizerState creation.
:func:`make_line_search_state`
    Factory function for LineSearchState creation.
:class:`Report`
    Immutable metadata for one instrumented step.
:class:`Monoid`
    Zero element and combine operation for an accumulator type.
:class:`OptimizerState`
    PyTree for optimizer state tracking.
:class:`LineSearchState`
    PyTree for one backtracking line-search trial.
UNIT_MONOID : Monoid
    Accumulator for display functions that keep no state.
SENTINEL_SEQUENCE : int
    Sequence number of a level-opening sentinel report.
NonJaxNumber : TypeAlias
    Type alias for Python numeric types.
ScalarBool : TypeAlias
    Type alias for scalar boolean values.
ScalarFloat : TypeAlias
    Type alias for scalar float values.
ScalarInteger : TypeAlias
    Type alias for scalar integer values.
ScalarNumeric : TypeAlias
    Type alias for any scalar numeric value.

Notes
-----
Always use factory functions for creating PyTree instances to ensure
proper type checking and validation.
"""

from .common_types import (
    NonJaxNumber,
    ScalarBool,
    ScalarFloat,
    ScalarInteger,
    ScalarNumeric,
)
from .optim_types import (
    LineSearchState,
    OptimizerState,
    make_line_search_state,
    make_optimizer_state,
)
from .report_types import (
    SENTINEL_SEQUENCE,
    UNIT_MONOID,
    Monoid,
    Report,
    make_report,
)

__all__: list[str] = [
    "make_line_search_state",
    "make_optimizer_state",
    "make_report",
    "LineSearchState",
    "Monoid",
    "NonJaxNumber",
    "OptimizerState",
    "Report",
    "ScalarBool",
    "ScalarFloat",
    "ScalarInteger",
    "ScalarNumeric",
    "SENTINEL_SEQUENCE",
    "UNIT_MONOID",
]
