"""Report records and accumulator descriptions.

Extended Summary
----------------
A :class:`Report` is the metadata attached to one instrumented step:
when it happened, how long it took since the previous step at the same
nesting level, how many steps that level has seen, and how deep the
level is. Reports are immutable; the history builds a fresh one for
every traced step.

A :class:`Monoid` describes the accumulator state a display function
threads through a run: how to build the empty state and how to merge
two states.

Routine Listings
----------------
:class:`Report`
    Immutable metadata for one instrumented step.
:class:`Monoid`
    Zero element and combine operation for an accumulator type.
:func:`make_report`
    Factory function for validated Report creation.
UNIT_MONOID : Monoid
    Accumulator for display functions that keep no state.
SENTINEL_SEQUENCE : int
    Sequence number marking a level-opening sentinel.

Notes
-----
Times are floating-point seconds read from the history's clock.
"""

from beartype import beartype
from beartype.typing import Any, Callable, NamedTuple

from .common_types import NonJaxNumber

SENTINEL_SEQUENCE: int = -1


class Report(NamedTuple):
    """Metadata for one instrumented step.

    Attributes
    ----------
    start_time : float
        Clock reading when the report was created.
    elapsed : float
        Seconds since the previous report at the same nesting level.
        Zero for the first report of a level.
    sequence_number : int
        Number of reports made at this level since it was opened.
        ``-1`` marks the level-opening sentinel.
    depth : int
        Nesting level, 0 at the top.
    """

    start_time: float
    elapsed: float
    sequence_number: int
    depth: int

    @property
    def is_sentinel(self) -> bool:
        """Whether this report only marks the opening of a level."""
        return self.sequence_number == SENTINEL_SEQUENCE


@beartype
def make_report(
    start_time: NonJaxNumber = 0.0,
    elapsed: NonJaxNumber = 0.0,
    sequence_number: int = SENTINEL_SEQUENCE,
    depth: int = 0,
) -> Report:
    """Create a validated Report instance.

    Parameters
    ----------
    start_time : NonJaxNumber, optional
        Clock reading in seconds, stored as float. Default is 0.0.
    elapsed : NonJaxNumber, optional
        Seconds since the previous report at this level, stored as
        float. Default is 0.0.
    sequence_number : int, optional
        Report count at this level. Default is -1 (sentinel).
    depth : int, optional
        Nesting level. Default is 0.

    Returns
    -------
    report : Report
        Validated report.

    Raises
    ------
    ValueError
        If depth is negative, sequence_number is below -1, or elapsed
        is negative.

    Examples
    --------
    >>> make_report(start_time=1.5, elapsed=0.5, sequence_number=3)
    Report(start_time=1.5, elapsed=0.5, sequence_number=3, depth=0)
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    if sequence_number < SENTINEL_SEQUENCE:
        raise ValueError(
            f"sequence_number must be >= {SENTINEL_SEQUENCE}, "
            f"got {sequence_number}"
        )
    if elapsed < 0.0:
        raise ValueError(f"elapsed must be non-negative, got {elapsed}")
    return Report(
        start_time=float(start_time),
        elapsed=float(elapsed),
        sequence_number=sequence_number,
        depth=depth,
    )


class Monoid(NamedTuple):
    """Zero element and combine operation for an accumulator type.

    Attributes
    ----------
    zero : Callable[[], Any]
        Builds the identity state.
    combine : Callable[[Any, Any], Any]
        Merges two states into a new one without mutating either.
    name : str
        Human-readable name, used when reporting composition errors.
    """

    zero: Callable[[], Any]
    combine: Callable[[Any, Any], Any]
    name: str = "monoid"


def _unit_zero() -> None:
    return None


def _unit_combine(_left: None, _right: None) -> None:
    return None


UNIT_MONOID: Monoid = Monoid(
    zero=_unit_zero, combine=_unit_combine, name="unit"
)
