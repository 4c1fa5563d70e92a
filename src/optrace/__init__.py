"""Pay-for-what-you-use instrumentation of iterative numerical algorithms.

Extended Summary
----------------
Algorithm authors annotate every phase of a computation with
hierarchical trace events; callers decide at the call site whether
those events cost anything at all. Run a computation with
:func:`eval_history` and no hook runs and no clock is read. Run the
same computation with :func:`trace_history` or
:func:`summarize_history` and get per-step timing, nesting depth, and
aggregate summaries, without changing the algorithm's control flow or
results.

Routine Listings
----------------
:mod:`display`
    Display functions: zero, line printer, summary table, composition
    and filtering.
:mod:`history`
    The history context, ambient reporting functions and run modes.
:mod:`iteration`
    The iterate driver and stop conditions.
:mod:`optim`
    Reference JAX optimizers built on the engine.
:mod:`types`
    Report records, accumulator descriptions and optimizer PyTrees.
:mod:`utils`
    Clock and time formatting.

Examples
--------
>>> import jax.numpy as jnp
>>> import optrace as ot
>>> def f(x):
...     return jnp.sum((x - 1.0) ** 2)
>>> final = ot.trace_history(
...     lambda: ot.optim.gradient_descent(f, jnp.zeros(2))
... )
 - ; 0; gradient_descent; 0.0000e+00 sec
 -  - ; 0; OptimizerState; 0.0000e+00 sec
 ...

Notes
-----
64-bit floating point is enabled in JAX on import, so optimizer states
are float64.
"""

from importlib.metadata import version

import jax

jax.config.update("jax_enable_x64", True)

from . import display, history, iteration, optim, types, utils  # noqa: E402
from .display import (  # noqa: E402
    ZERO_DISPLAY,
    DisplayFunction,
    compose_displays,
    disp_iteration,
    display_filter,
    make_display_function,
    max_report_level,
    summary_table,
)
from .history import (  # noqa: E402
    History,
    ReportStackError,
    begin_function,
    collect_reports,
    current_iteration,
    eval_history,
    phase,
    report,
    run_history,
    summarize_history,
    trace_all_history,
    trace_history,
)
from .iteration import (  # noqa: E402
    all_of,
    any_of,
    fx1_grows,
    iterate,
    max_iterations,
    mul_tolerance,
    stop_below,
)
from .types import Report  # noqa: E402

__version__: str = version("optrace")

__all__: list[str] = [
    "__version__",
    "display",
    "history",
    "iteration",
    "optim",
    "types",
    "utils",
    "all_of",
    "any_of",
    "begin_function",
    "collect_reports",
    "compose_displays",
    "current_iteration",
    "disp_iteration",
    "display_filter",
    "eval_history",
    "fx1_grows",
    "iterate",
    "make_display_function",
    "max_iterations",
    "max_report_level",
    "mul_tolerance",
    "phase",
    "report",
    "run_history",
    "stop_below",
    "summarize_history",
    "summary_table",
    "trace_all_history",
    "trace_history",
    "DisplayFunction",
    "History",
    "Report",
    "ReportStackError",
    "ZERO_DISPLAY",
]
