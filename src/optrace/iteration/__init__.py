"""Iteration driver and stop conditions.

Submodules
----------
driver
    The iterate loop
stop
    Stop conditions and the x1/fx1 capabilities they rely on

Routine Listings
----------------
all_of : function
    Stop when all conditions hold
any_of : function
    Stop when any condition holds
current_objective : function
    Objective value of an iterate
current_point : function
    Current point of an iterate
fx1_grows : function
    Stop when the objective increased
iterate : function
    Apply a step function until a stop condition fires
max_iterations : function
    Stop after n iterations
mul_tolerance : function
    Stop at relative convergence of the objective
stop_below : function
    Stop once the objective is below a threshold
HasFx1 : Protocol
    Iterate exposing its objective value
HasX1 : Protocol
    Iterate exposing its current point
StopCondition : TypeAlias
    Predicate over the previous and current iterate
MUL_TOLERANCE_EPSILON : float
    Denominator guard of mul_tolerance
"""

from .driver import iterate
from .stop import (
    MUL_TOLERANCE_EPSILON,
    HasFx1,
    HasX1,
    StopCondition,
    all_of,
    any_of,
    current_objective,
    current_point,
    fx1_grows,
    max_iterations,
    mul_tolerance,
    stop_below,
)

__all__: list[str] = [
    "all_of",
    "any_of",
    "current_objective",
    "current_point",
    "fx1_grows",
    "iterate",
    "max_iterations",
    "mul_tolerance",
    "stop_below",
    "HasFx1",
    "HasX1",
    "StopCondition",
    "MUL_TOLERANCE_EPSILON",
]
