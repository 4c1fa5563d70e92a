"""The history context that every instrumented computation runs inside.

Extended Summary
----------------
A :class:`History` owns everything a traced run mutates: the report
stack (one :class:`~optrace.types.Report` per open nesting level), the
accumulator state of the display function, and the display function
itself. It is the only place where the clock is read and where display
hooks are invoked.

Algorithm code never receives the history as an argument. While
:meth:`History.run` executes its body, the history is installed in a
``contextvars.ContextVar`` and the module-level functions
:func:`report`, :func:`begin_function`, :func:`collect_reports`,
:func:`phase` and :func:`current_iteration` delegate to it. Each thread
sees its own history. Asyncio tasks created inside a run copy the
context and share the enclosing run's history, so they must not open
and close levels concurrently.

Routine Listings
----------------
:class:`History`
    Report stack, accumulator and display function of one run.
:class:`ReportStackError`
    Push/pop imbalance or reporting outside of a run.
:func:`active_history`
    The history of the current execution context.
:func:`report`
    Record a value as one step and return it unchanged.
:func:`collect_reports`
    Run a callable inside a new nesting level.
:func:`begin_function`
    Report a phase label and run a callable nested below it.
:func:`phase`
    Context-manager form of begin_function.
:func:`current_iteration`
    Sequence number of the innermost level.

Notes
-----
When the display function is ``ZERO_DISPLAY`` the history binds its
untraced report path at construction: no hook is called, the clock is
never sampled and no report is allocated. Only the per-level sequence
numbers are maintained, so stop conditions such as ``max_iterations``
keep working.

Examples
--------
>>> def body():
...     with phase("warmup"):
...         for x in range(3):
...             report(float(x))
...     return "done"
>>> History(disp_iteration()).run(body)
 - ; 0; warmup; 0.0000e+00 sec
 -  - ; 0; float; 0.0000e+00 sec
 -  - ; 1; float; 2.1000e-06 sec
 -  - ; 2; float; 1.3000e-06 sec
'done'
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar

from beartype.typing import Any, Callable, Iterator, List, Optional, Tuple

from optrace.display import ZERO_DISPLAY, DisplayFunction, Effect
from optrace.types import SENTINEL_SEQUENCE, Report
from optrace.utils import Clock, default_clock

logger = logging.getLogger(__name__)

_ACTIVE_HISTORY: ContextVar[Optional["History"]] = ContextVar(
    "optrace_active_history", default=None
)


class ReportStackError(AssertionError):
    """The report stack is out of balance or no history is running.

    This signals a programming error in how levels are opened and
    closed, never a recoverable condition of the algorithm.
    """


def _untimed() -> float:
    return 0.0


class History:
    """Report stack, accumulator and display function for one run.

    Each open level is held as two parallel entries: its sequence
    number and the clock reading of its latest report. The untraced
    report path only increments the innermost sequence number.

    Parameters
    ----------
    display : DisplayFunction, optional
        Hooks observing the run. Default is ``ZERO_DISPLAY``.
    clock : Clock, optional
        Zero-argument callable returning seconds. Defaults to
        ``time.perf_counter``. Never called for ``ZERO_DISPLAY``.

    Attributes
    ----------
    report : Callable[[Any], Any]
        Record one step at the innermost level and return the value.
        Bound at construction to the traced or untraced implementation.
        Only valid while :meth:`run` executes.
    """

    def __init__(
        self,
        display: DisplayFunction = ZERO_DISPLAY,
        clock: Optional[Clock] = None,
    ) -> None:
        self._display: DisplayFunction = display
        self._traced: bool = display is not ZERO_DISPLAY
        self._sequence: List[int] = []
        self._times: List[float] = []
        self._state: Any = display.monoid.zero()
        self._running: bool = False
        if self._traced:
            self._now: Clock = clock if clock is not None else default_clock
            self.report: Callable[[Any], Any] = self._report_traced
        else:
            self._now = _untimed
            self.report = self._report_untraced

    def __repr__(self) -> str:
        return (
            f"History(display={self._display.name!r}, "
            f"depth={self.depth}, running={self._running})"
        )

    @property
    def display(self) -> DisplayFunction:
        """The display function observing this history."""
        return self._display

    @property
    def is_traced(self) -> bool:
        """Whether hooks run and the clock is read."""
        return self._traced

    @property
    def is_running(self) -> bool:
        """Whether :meth:`run` is currently executing a body."""
        return self._running

    @property
    def stack(self) -> Tuple[Report, ...]:
        """Snapshot of the report stack, most recent level first.

        Under ``ZERO_DISPLAY`` every ``start_time`` is 0.0. ``elapsed``
        is not kept per level and is always 0.0 in the snapshot.
        """
        return tuple(
            Report(start, 0.0, sequence, depth)
            for depth, (sequence, start) in reversed(
                list(enumerate(zip(self._sequence, self._times)))
            )
        )

    @property
    def depth(self) -> int:
        """Depth of the innermost open level, -1 before the first run."""
        return len(self._sequence) - 1

    @property
    def state(self) -> Any:
        """Current accumulator state of the display function."""
        return self._state

    def run(self, body: Callable[[], Any]) -> Any:
        """Run ``body`` observed by this history and return its result.

        The accumulator is reset to the monoid's zero and the report
        stack to a single top-level sentinel. The start hook runs before
        the body and the stop hook after it, with the final state.

        Parameters
        ----------
        body : Callable[[], Any]
            Computation calling report, begin_function, iterate and so
            on.

        Returns
        -------
        result : Any
            Whatever ``body`` returned.

        Raises
        ------
        RuntimeError
            If this history is already running.
        ReportStackError
            If the body returns with levels still open.

        Notes
        -----
        Exceptions raised by the body or by a hook effect propagate
        unchanged. The stop hook is then skipped and state committed
        before the failure is kept.
        """
        if self._running:
            raise RuntimeError(f"{self!r} is already running")
        display: DisplayFunction = self._display
        self._state = display.monoid.zero()
        self._sequence = [SENTINEL_SEQUENCE]
        self._times = [self._now()]
        logger.debug("starting history run with display %r", display.name)
        if self._traced:
            display.on_start()
        token = _ACTIVE_HISTORY.set(self)
        self._running = True
        try:
            result: Any = body()
        finally:
            self._running = False
            _ACTIVE_HISTORY.reset(token)
        if len(self._sequence) != 1:
            raise ReportStackError(
                f"history run finished with {len(self._sequence) - 1} "
                f"unclosed level(s)"
            )
        if self._traced:
            display.on_stop(self._state)
        logger.debug(
            "finished history run with display %r after %d top-level "
            "report(s)",
            display.name,
            self._sequence[0] + 1,
        )
        return result

    def _innermost(self) -> int:
        if not self._sequence:
            raise ReportStackError("report stack is empty")
        return len(self._sequence) - 1

    def _report_traced(self, value: Any) -> Any:
        now: float = self._now()
        depth: int = self._innermost()
        sequence: int = self._sequence[depth]
        elapsed: float = (
            0.0
            if sequence == SENTINEL_SEQUENCE
            else now - self._times[depth]
        )
        self._sequence[depth] = sequence + 1
        self._times[depth] = now
        new_report: Report = Report(now, elapsed, sequence + 1, depth)
        display: DisplayFunction = self._display
        contribution: Any
        effect: Effect
        contribution, effect = display.on_step(new_report, self._state, value)
        self._state = display.monoid.combine(self._state, contribution)
        if effect is not None:
            effect()
        return value

    def _report_untraced(self, value: Any) -> Any:
        try:
            self._sequence[-1] += 1
        except IndexError:
            raise ReportStackError("report stack is empty") from None
        return value

    def _open_level(self) -> None:
        self._innermost()
        self._sequence.append(SENTINEL_SEQUENCE)
        self._times.append(self._now())

    def _close_level(self) -> None:
        if len(self._sequence) <= 1:
            raise ReportStackError("cannot close the top-level report")
        self._sequence.pop()
        self._times.pop()

    @contextmanager
    def level(self) -> Iterator[Report]:
        """Open a nesting level for the duration of the ``with`` block.

        Yields the sentinel report of the new level. The level is closed
        on every exit path, including exceptions and generator close.
        """
        self._open_level()
        try:
            yield Report(
                self._times[-1], 0.0, SENTINEL_SEQUENCE, self.depth
            )
        finally:
            self._close_level()

    def collect_reports(
        self, body: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Any:
        """Run ``body(*args, **kwargs)`` inside a new nesting level."""
        with self.level():
            return body(*args, **kwargs)

    def begin_function(
        self,
        label: str,
        body: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Report ``label`` in a new level and run ``body`` one level below.

        Two levels are opened: the first holds the label as its only
        report, the second holds the reports made by ``body``. A summary
        table therefore counts entering the phase separately from the
        steps inside it.
        """
        with self.level():
            self.report(label)
            with self.level():
                return body(*args, **kwargs)

    def current_iteration(self) -> int:
        """Sequence number of the innermost level."""
        return self._sequence[self._innermost()]


def active_history() -> History:
    """Return the history running in the current execution context.

    Raises
    ------
    ReportStackError
        If no history is running.
    """
    history: Optional[History] = _ACTIVE_HISTORY.get()
    if history is None:
        raise ReportStackError(
            "no history is running; wrap the computation in run_history "
            "or eval_history"
        )
    return history


def report(value: Any) -> Any:
    """Record ``value`` as one step of the innermost level.

    Returns
    -------
    value : Any
        The argument itself, whatever the display function does.
    """
    return active_history().report(value)


def collect_reports(
    body: Callable[..., Any], *args: Any, **kwargs: Any
) -> Any:
    """Run ``body(*args, **kwargs)`` inside a new nesting level."""
    return active_history().collect_reports(body, *args, **kwargs)


def begin_function(
    label: str, body: Callable[..., Any], *args: Any, **kwargs: Any
) -> Any:
    """Enter a new phase called ``label`` and run ``body`` inside it.

    Call this every time the computation enters a new phase; for an
    iterative algorithm, typically once around its ``iterate`` loop.

    Examples
    --------
    >>> begin_function("newton", iterate, newton_step, x0, max_iterations(20))
    """
    return active_history().begin_function(label, body, *args, **kwargs)


@contextmanager
def phase(label: str) -> Iterator[None]:
    """Context-manager form of :func:`begin_function`."""
    history: History = active_history()
    with history.level():
        history.report(label)
        with history.level():
            yield


def current_iteration() -> int:
    """Sequence number of the innermost level of the running history."""
    return active_history().current_iteration()
