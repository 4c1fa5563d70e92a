"""Reference optimizers written against the history engine.

Extended Summary
----------------
Small JAX optimizers showing how algorithm code uses ``begin_function``,
``report`` and ``iterate``. Their states expose ``x1`` and ``fx1``, so
every stop condition in :mod:`optrace.iteration` applies.

Submodules
----------
common
    Line search, default stop condition and shared constants
gradient_descent
    Steepest descent with backtracking
newton
    Newton-Raphson with the exact Hessian

Routine Listings
----------------
backtracking_line_search : function
    Armijo backtracking along a search direction
default_stop : function
    Iteration cap combined with relative convergence
gradient_descent : function
    Steepest descent from a starting point
gradient_descent_step : function
    One steepest-descent step
newton_direction : function
    Newton search direction
newton_raphson : function
    Newton-Raphson from a starting point
"""

from .common import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    Objective,
    backtracking_line_search,
    default_stop,
)
from .gradient_descent import gradient_descent, gradient_descent_step
from .newton import NEWTON_MAX_ITERATIONS, newton_direction, newton_raphson

__all__: list[str] = [
    "backtracking_line_search",
    "default_stop",
    "gradient_descent",
    "gradient_descent_step",
    "newton_direction",
    "newton_raphson",
    "Objective",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOLERANCE",
    "NEWTON_MAX_ITERATIONS",
]
