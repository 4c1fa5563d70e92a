"""Entry points running a computation inside a history.

Extended Summary
----------------
Each entry point differs only in the display function it installs.
Algorithms are written once against :func:`~optrace.history.report`,
:func:`~optrace.history.begin_function` and
:func:`~optrace.iteration.iterate`; the caller picks how much of the run
to observe here.

Routine Listings
----------------
:func:`run_history`
    Run with an explicit display function.
:func:`eval_history`
    Run without any instrumentation cost.
:func:`trace_history`
    Print one line per report up to a nesting depth.
:func:`trace_all_history`
    Print one line for every report.
:func:`summarize_history`
    Print a call-count table when the run ends.
DEFAULT_TRACE_DEPTH : int
    Nesting depth shown by trace_history.
"""

from beartype import beartype
from beartype.typing import Any, Callable, Optional, TextIO

from optrace.display import (
    ZERO_DISPLAY,
    DisplayFunction,
    compose_displays,
    disp_iteration,
    display_filter,
    max_report_level,
    summary_table,
)
from optrace.utils import Clock

from .context import History

DEFAULT_TRACE_DEPTH: int = 2


@beartype
def run_history(
    display: DisplayFunction,
    body: Callable[[], Any],
    clock: Optional[Clock] = None,
) -> Any:
    """Run ``body`` observed by ``display`` and return its result.

    Parameters
    ----------
    display : DisplayFunction
        Hooks observing the run.
    body : Callable[[], Any]
        Zero-argument computation. Use ``functools.partial`` or a lambda
        to bind arguments.
    clock : Clock, optional
        Clock used for report timestamps. Defaults to
        ``time.perf_counter``.

    Returns
    -------
    result : Any
        Whatever ``body`` returned.

    Examples
    --------
    >>> from functools import partial
    >>> run_history(summary_table(), partial(gradient_descent, f, x0))
    """
    return History(display, clock=clock).run(body)


def eval_history(body: Callable[[], Any]) -> Any:
    """Run ``body`` with no display function.

    This is the most efficient way to run an instrumented algorithm: no
    hook runs and no timestamp is taken.
    """
    return History(ZERO_DISPLAY).run(body)


def trace_history(
    body: Callable[[], Any],
    max_depth: int = DEFAULT_TRACE_DEPTH,
    stream: Optional[TextIO] = None,
) -> Any:
    """Run ``body`` printing one line per report up to ``max_depth``."""
    display: DisplayFunction = display_filter(
        max_report_level(max_depth), disp_iteration(stream)
    )
    return History(display).run(body)


def trace_all_history(
    body: Callable[[], Any], stream: Optional[TextIO] = None
) -> Any:
    """Run ``body`` printing one line for every report."""
    return History(disp_iteration(stream)).run(body)


def summarize_history(
    body: Callable[[], Any],
    stream: Optional[TextIO] = None,
    trace: bool = False,
) -> Any:
    """Run ``body`` and print a call-count table once it returns.

    Parameters
    ----------
    body : Callable[[], Any]
        Zero-argument computation.
    stream : TextIO, optional
        Destination of the output. Defaults to ``sys.stdout``.
    trace : bool, optional
        Also print one line per report while running. Default is False.

    Returns
    -------
    result : Any
        Whatever ``body`` returned.
    """
    display: DisplayFunction = summary_table(stream)
    if trace:
        display = compose_displays(disp_iteration(stream), display)
    return History(display).run(body)
