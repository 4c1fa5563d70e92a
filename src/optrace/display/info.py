"""Per-iteration line printing.

Extended Summary
----------------
The line printer writes one line for every reported value, indented by
the report's nesting depth. What goes on the line is decided by a
``DisplayInfo`` function ``(report, value) -> str``; the building
blocks below each return a ``"; "``-prefixed fragment and
:func:`join_info` concatenates them.

With the default info a traced gradient descent prints lines such as::

     - ; 0; OptimizerState; 0.0000e+00 sec
     -  - ; 0; backtracking; 0.0000e+00 sec

Routine Listings
----------------
:func:`disp_iteration`
    Line printer with iteration number, value name and step time.
:func:`disp_iteration_`
    Line printer with a caller-supplied info function.
:func:`join_info`
    Concatenate several info functions.
:func:`info_string`
    Fixed text.
:func:`info_itr`
    Sequence number of the report.
:func:`info_type`
    Name of the reported value.
:func:`info_diff_time`
    Time since the previous report at the same level.
:func:`info_text`
    Text rendering of the reported value.
"""

import sys

from beartype.typing import Any, Callable, Optional, TextIO, Tuple

from optrace.types import Report
from optrace.utils import format_time

from .functions import DisplayFunction, Effect
from .names import report_name, report_text

DisplayInfo = Callable[[Report, Any], str]

LEVEL_INDENT: str = " - "


def info_string(text: str) -> DisplayInfo:
    """Info function that always returns ``text``."""

    def info(_report: Report, _value: Any) -> str:
        return text

    return info


def info_itr(report: Report, _value: Any) -> str:
    """Print the current iteration of the optimization."""
    return f"; {report.sequence_number}"


def info_type(_report: Report, value: Any) -> str:
    """Print the name of the optimization step."""
    return f"; {report_name(value)}"


def info_diff_time(report: Report, _value: Any) -> str:
    """Print the time used to complete the step."""
    return f"; {format_time(report.elapsed)}"


def info_text(_report: Report, value: Any) -> str:
    """Print the rendered value."""
    return f"; {report_text(value)}"


def join_info(*infos: DisplayInfo) -> DisplayInfo:
    """Concatenate the output of several info functions in order."""

    def info(report: Report, value: Any) -> str:
        return "".join(part(report, value) for part in infos)

    return info


def disp_iteration_(
    info: DisplayInfo, stream: Optional[TextIO] = None
) -> DisplayFunction:
    """Print one line per reported value using ``info``.

    Parameters
    ----------
    info : DisplayInfo
        Builds the text after the depth indentation.
    stream : TextIO, optional
        Destination of the lines. Defaults to ``sys.stdout`` at the
        time each line is printed.

    Returns
    -------
    display : DisplayFunction
        Stateless display function (``UNIT_MONOID``).
    """

    def on_step(
        report: Report, _state: Any, value: Any
    ) -> Tuple[None, Effect]:
        line: str = LEVEL_INDENT * report.depth + info(report, value)

        def emit() -> None:
            print(line, file=stream if stream is not None else sys.stdout)

        return None, emit

    return DisplayFunction(
        on_start=lambda: None,
        on_step=on_step,
        on_stop=lambda _state: None,
        name="disp_iteration",
    )


def disp_iteration(stream: Optional[TextIO] = None) -> DisplayFunction:
    """Print iteration number, value name and step time for every report."""
    return disp_iteration_(
        join_info(info_itr, info_type, info_diff_time), stream=stream
    )
