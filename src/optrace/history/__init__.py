"""History context and run modes.

Extended Summary
----------------
The history is the execution context of an instrumented computation.
It holds the report stack and the display function's accumulator, and
it is reached through the ambient functions below, so algorithm code
keeps its ordinary signatures.

Submodules
----------
context
    History, ambient reporting functions and nesting primitives
runners
    Entry points selecting the display function of a run

Routine Listings
----------------
active_history : function
    The history of the current execution context
begin_function : function
    Report a phase label and run a callable nested below it
collect_reports : function
    Run a callable inside a new nesting level
current_iteration : function
    Sequence number of the innermost level
eval_history : function
    Run without instrumentation cost
phase : function
    Context-manager form of begin_function
report : function
    Record a value as one step and return it unchanged
run_history : function
    Run with an explicit display function
summarize_history : function
    Run and print a call-count table at the end
trace_all_history : function
    Run printing every report
trace_history : function
    Run printing reports up to a nesting depth
History : class
    Report stack, accumulator and display function of one run
ReportStackError : class
    Push/pop imbalance or reporting outside of a run
DEFAULT_TRACE_DEPTH : int
    Nesting depth shown by trace_history
"""

from .context import (
    History,
    ReportStackError,
    active_history,
    begin_function,
    collect_reports,
    current_iteration,
    phase,
    report,
)
from .runners import (
    DEFAULT_TRACE_DEPTH,
    eval_history,
    run_history,
    summarize_history,
    trace_all_history,
    trace_history,
)

__all__: list[str] = [
    "active_history",
    "begin_function",
    "collect_reports",
    "current_iteration",
    "eval_history",
    "phase",
    "report",
    "run_history",
    "summarize_history",
    "trace_all_history",
    "trace_history",
    "History",
    "ReportStackError",
    "DEFAULT_TRACE_DEPTH",
]
