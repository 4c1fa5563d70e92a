"""End-of-run summary table.

Extended Summary
----------------
:func:`summary_table` is a display function that prints nothing while
the run is in progress. Each report contributes one call and its
elapsed time to the entry keyed by the reported value's name; when the
run finishes, the accumulated entries are printed as a table with the
number of calls and the average time per call::

     -------------------------------------------------------------
     | report name    | number of calls | average time per call |
     -------------------------------------------------------------
     | OptimizerState | 12              | 2.3100e-04 sec        |
     | backtracking   | 11              | 1.0020e-03 sec        |
     -------------------------------------------------------------

Routine Listings
----------------
:class:`CountInfo`
    Call count and total elapsed time of one table row.
:func:`merge_counts`
    Combine two count tables without mutating either.
:func:`render_summary_table`
    Render a count table as text.
:func:`summary_table`
    Display function printing the table at the end of a run.
COUNTS_MONOID : Monoid
    Accumulator description for count tables.
"""

import sys

from beartype.typing import (
    Any,
    Dict,
    List,
    Mapping,
    NamedTuple,
    Optional,
    TextIO,
    Tuple,
)

from optrace.types import Monoid, Report
from optrace.utils import format_time

from .functions import DisplayFunction, Effect
from .names import report_name

TITLE_NAME: str = "report name"
TITLE_COUNT: str = "number of calls"
TITLE_TIME: str = "average time per call"


class CountInfo(NamedTuple):
    """Call count and total elapsed seconds for one report name.

    Attributes
    ----------
    num_calls : int
        Number of reports seen.
    total_elapsed : float
        Sum of their elapsed times.
    """

    num_calls: int
    total_elapsed: float

    @property
    def average_elapsed(self) -> float:
        """Mean elapsed time per call."""
        return self.total_elapsed / self.num_calls


Counts = Dict[str, CountInfo]


def merge_counts(
    left: Mapping[str, CountInfo], right: Mapping[str, CountInfo]
) -> Counts:
    """Combine two count tables, summing the entries they share."""
    merged: Counts = dict(left)
    for key, info in right.items():
        previous: Optional[CountInfo] = merged.get(key)
        if previous is None:
            merged[key] = info
        else:
            merged[key] = CountInfo(
                num_calls=previous.num_calls + info.num_calls,
                total_elapsed=previous.total_elapsed + info.total_elapsed,
            )
    return merged


def _empty_counts() -> Counts:
    return {}


COUNTS_MONOID: Monoid = Monoid(
    zero=_empty_counts, combine=merge_counts, name="counts"
)


def _pad(text: str, width: int) -> str:
    return text.ljust(width)[:width]


def render_summary_table(counts: Mapping[str, CountInfo]) -> str:
    """Render a count table as framed text, rows sorted by name.

    Column widths fit the longest entry of each column, headers
    included.
    """
    rows: List[Tuple[str, str, str]] = [
        (name, str(info.num_calls), format_time(info.average_elapsed))
        for name, info in sorted(counts.items())
    ]
    width_name: int = max([len(TITLE_NAME)] + [len(r[0]) for r in rows])
    width_count: int = max([len(TITLE_COUNT)] + [len(r[1]) for r in rows])
    width_time: int = max([len(TITLE_TIME)] + [len(r[2]) for r in rows])
    hline: str = " " + "-" * (width_name + width_count + width_time + 10)

    def line(name: str, count: str, time: str) -> str:
        return (
            f" | {_pad(name, width_name)}"
            f" | {_pad(count, width_count)}"
            f" | {_pad(time, width_time)} | "
        )

    lines: List[str] = [
        hline,
        line(TITLE_NAME, TITLE_COUNT, TITLE_TIME),
        hline,
    ]
    lines.extend(line(*row) for row in rows)
    lines.append(hline)
    return "\n".join(lines)


def summary_table(stream: Optional[TextIO] = None) -> DisplayFunction:
    """Display function that prints a call-count table when the run ends.

    Parameters
    ----------
    stream : TextIO, optional
        Destination of the table. Defaults to ``sys.stdout``.

    Returns
    -------
    display : DisplayFunction
        Display function accumulating over ``COUNTS_MONOID``.

    Examples
    --------
    >>> summarize_history(lambda: begin_function("demo", lambda: 1))
    """

    def on_step(
        report: Report, _state: Any, value: Any
    ) -> Tuple[Counts, Effect]:
        return {report_name(value): CountInfo(1, report.elapsed)}, None

    def on_stop(state: Counts) -> None:
        print(
            render_summary_table(state),
            file=stream if stream is not None else sys.stdout,
        )

    return DisplayFunction(
        on_start=lambda: None,
        on_step=on_step,
        on_stop=on_stop,
        monoid=COUNTS_MONOID,
        name="summary_table",
    )
