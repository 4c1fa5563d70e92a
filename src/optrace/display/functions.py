"""Display functions and how they combine.

Extended Summary
----------------
A display function bundles the three moments at which a traced run may
do something observable: once before the body starts, once per
reported value, and once after the body finishes. Each display function
also carries the :class:`~optrace.types.Monoid` of the accumulator
state it threads through the run.

The step hook never edits the accumulator in place. It returns the
contribution of the current step together with an optional effect, and
the history folds the contribution into the accumulator with the
monoid's ``combine`` before performing the effect.

Routine Listings
----------------
:class:`DisplayFunction`
    Start, step and stop hooks plus the accumulator monoid.
:func:`make_display_function`
    Build a DisplayFunction with no-op defaults.
:func:`compose_displays`
    Run several display functions side by side.
:func:`display_filter`
    Skip the step hook when a predicate rejects a report.
:func:`max_report_level`
    Filter predicate keeping reports up to a nesting depth.
:func:`report_types`
    Filter predicate keeping reports of the given value names.
ZERO_DISPLAY : DisplayFunction
    The display function that does nothing.

Notes
-----
``ZERO_DISPLAY`` is the identity of :func:`compose_displays` and is
recognised by :class:`optrace.history.History`, which then skips hook
dispatch and clock reads entirely.
"""

from beartype import beartype
from beartype.typing import Any, Callable, NamedTuple, Optional, Tuple

from optrace.types import UNIT_MONOID, Monoid, Report

from .names import report_name

Effect = Optional[Callable[[], None]]
StepHook = Callable[[Report, Any, Any], Tuple[Any, Effect]]
DisplayFilter = Callable[[Report, Any], bool]


class DisplayFunction(NamedTuple):
    """Hooks run at the start, at every report, and at the end of a run.

    Attributes
    ----------
    on_start : Callable[[], None]
        Performed once before the body runs.
    on_step : StepHook
        Called as ``on_step(report, state, value)`` for every reported
        value. Returns ``(contribution, effect)`` where ``effect`` is
        ``None`` or a zero-argument callable.
    on_stop : Callable[[Any], None]
        Performed once after the body returns, with the final state.
    monoid : Monoid
        Zero and combine for the accumulator state.
    name : str
        Label used in logs.
    """

    on_start: Callable[[], None]
    on_step: StepHook
    on_stop: Callable[[Any], None]
    monoid: Monoid = UNIT_MONOID
    name: str = "display"


def _no_start() -> None:
    return None


def _no_stop(_state: Any) -> None:
    return None


def _no_step(
    _report: Report, _state: Any, _value: Any
) -> Tuple[None, None]:
    return None, None


ZERO_DISPLAY: DisplayFunction = DisplayFunction(
    on_start=_no_start,
    on_step=_no_step,
    on_stop=_no_stop,
    monoid=UNIT_MONOID,
    name="zero",
)


@beartype
def make_display_function(
    on_start: Optional[Callable[[], None]] = None,
    on_step: Optional[StepHook] = None,
    on_stop: Optional[Callable[[Any], None]] = None,
    monoid: Monoid = UNIT_MONOID,
    name: str = "display",
) -> DisplayFunction:
    """Build a DisplayFunction, filling missing hooks with no-ops.

    Parameters
    ----------
    on_start : Callable[[], None], optional
        Start hook. Defaults to doing nothing.
    on_step : StepHook, optional
        Step hook. Defaults to contributing ``monoid.zero()`` with no
        effect.
    on_stop : Callable[[Any], None], optional
        Stop hook. Defaults to doing nothing.
    monoid : Monoid, optional
        Accumulator description. Default is UNIT_MONOID.
    name : str, optional
        Label used in logs.

    Returns
    -------
    display : DisplayFunction
        The assembled display function.
    """
    if on_step is None:

        def on_step(
            _report: Report, _state: Any, _value: Any
        ) -> Tuple[Any, Effect]:
            return monoid.zero(), None

    return DisplayFunction(
        on_start=on_start if on_start is not None else _no_start,
        on_step=on_step,
        on_stop=on_stop if on_stop is not None else _no_stop,
        monoid=monoid,
        name=name,
    )


def _unify_monoids(first: Monoid, second: Monoid) -> Monoid:
    if first is second or second is UNIT_MONOID:
        return first
    if first is UNIT_MONOID:
        return second
    raise TypeError(
        f"cannot compose display functions accumulating "
        f"{first.name!r} and {second.name!r}"
    )


def _sequence(first: Effect, second: Effect) -> Effect:
    if first is None:
        return second
    if second is None:
        return first

    def both() -> None:
        first()
        second()

    return both


def _lift_step(display: DisplayFunction, monoid: Monoid) -> StepHook:
    """Adapt a stateless step hook to contribute ``monoid.zero()``."""
    if display.monoid is monoid:
        return display.on_step
    inner: StepHook = display.on_step

    def on_step(
        report: Report, _state: Any, value: Any
    ) -> Tuple[Any, Effect]:
        _, effect = inner(report, None, value)
        return monoid.zero(), effect

    return on_step


def _lift_stop(
    display: DisplayFunction, monoid: Monoid
) -> Callable[[Any], None]:
    if display.monoid is monoid:
        return display.on_stop
    inner: Callable[[Any], None] = display.on_stop

    def on_stop(_state: Any) -> None:
        inner(None)

    return on_stop


def _compose_pair(
    first: DisplayFunction, second: DisplayFunction
) -> DisplayFunction:
    if first is ZERO_DISPLAY:
        return second
    if second is ZERO_DISPLAY:
        return first
    monoid: Monoid = _unify_monoids(first.monoid, second.monoid)
    step_first: StepHook = _lift_step(first, monoid)
    step_second: StepHook = _lift_step(second, monoid)
    stop_first: Callable[[Any], None] = _lift_stop(first, monoid)
    stop_second: Callable[[Any], None] = _lift_stop(second, monoid)

    def on_start() -> None:
        first.on_start()
        second.on_start()

    def on_step(
        report: Report, state: Any, value: Any
    ) -> Tuple[Any, Effect]:
        part_first, effect_first = step_first(report, state, value)
        part_second, effect_second = step_second(report, state, value)
        return (
            monoid.combine(part_first, part_second),
            _sequence(effect_first, effect_second),
        )

    def on_stop(state: Any) -> None:
        stop_first(state)
        stop_second(state)

    return DisplayFunction(
        on_start=on_start,
        on_step=on_step,
        on_stop=on_stop,
        monoid=monoid,
        name=f"{first.name}+{second.name}",
    )


@beartype
def compose_displays(
    first: DisplayFunction, *others: DisplayFunction
) -> DisplayFunction:
    """Run several display functions side by side.

    Start and stop hooks run in argument order. Step contributions are
    merged with the shared monoid and the effects run in argument
    order. A display function whose monoid is ``UNIT_MONOID`` composes
    with any other; it sees ``None`` as its state.

    Parameters
    ----------
    first : DisplayFunction
        Leftmost display function.
    *others : DisplayFunction
        Further display functions, composed left to right.

    Returns
    -------
    display : DisplayFunction
        Combined display function. Composing with ``ZERO_DISPLAY``
        returns the other operand unchanged.

    Raises
    ------
    TypeError
        If two operands accumulate different non-unit monoids.

    Examples
    --------
    >>> both = compose_displays(disp_iteration(), summary_table())
    >>> both.monoid is COUNTS_MONOID
    True
    """
    combined: DisplayFunction = first
    for other in others:
        combined = _compose_pair(combined, other)
    return combined


@beartype
def display_filter(
    predicate: DisplayFilter, display: DisplayFunction
) -> DisplayFunction:
    """Skip the step hook whenever ``predicate(report, value)`` is false.

    A rejected step contributes ``monoid.zero()`` and no effect, so the
    accumulator is left as it was.

    Parameters
    ----------
    predicate : DisplayFilter
        Called with the new report and the reported value.
    display : DisplayFunction
        Display function to guard.

    Returns
    -------
    filtered : DisplayFunction
        Guarded display function. ``ZERO_DISPLAY`` is returned as is.
    """
    if display is ZERO_DISPLAY:
        return display
    inner: StepHook = display.on_step
    monoid: Monoid = display.monoid

    def on_step(
        report: Report, state: Any, value: Any
    ) -> Tuple[Any, Effect]:
        if predicate(report, value):
            return inner(report, state, value)
        return monoid.zero(), None

    return display._replace(
        on_step=on_step, name=f"filtered({display.name})"
    )


@beartype
def max_report_level(max_depth: int) -> DisplayFilter:
    """Filter predicate keeping reports with ``depth <= max_depth``."""
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    def keep(report: Report, _value: Any) -> bool:
        return report.depth <= max_depth

    return keep


def report_types(*names: str) -> DisplayFilter:
    """Filter predicate keeping values whose report_name is in ``names``."""
    wanted: frozenset[str] = frozenset(names)

    def keep(_report: Report, value: Any) -> bool:
        return report_name(value) in wanted

    return keep
