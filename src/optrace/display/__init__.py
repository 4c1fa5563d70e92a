"""Display functions observing a traced run.

Extended Summary
----------------
Everything a caller can plug into a history run: the zero display
function, the per-iteration line printer, the end-of-run summary table,
and the combinators that compose and filter them.

Submodules
----------
functions
    DisplayFunction, composition and filtering
info
    Line printer and its info formatters
names
    Names and text renderings of reported values
summary
    Call-count summary table

Routine Listings
----------------
compose_displays : function
    Run several display functions side by side
disp_iteration : function
    Print iteration, value name and step time for every report
disp_iteration_ : function
    Print one line per report using a custom info function
display_filter : function
    Skip the step hook when a predicate rejects a report
info_diff_time : function
    Info fragment with the step time
info_itr : function
    Info fragment with the iteration number
info_string : function
    Info fragment with fixed text
info_text : function
    Info fragment with the rendered value
info_type : function
    Info fragment with the value name
join_info : function
    Concatenate info functions
make_display_function : function
    Build a DisplayFunction with no-op defaults
max_report_level : function
    Filter keeping reports up to a nesting depth
merge_counts : function
    Combine two count tables
render_summary_table : function
    Render a count table as text
report_name : function
    Short name of a reported value
report_text : function
    Text rendering of a reported value
report_types : function
    Filter keeping reports of the given value names
summary_table : function
    Display function printing a call-count table at the end
CountInfo : NamedTuple
    Call count and total elapsed time of one table row
DisplayFunction : NamedTuple
    Start, step and stop hooks plus accumulator monoid
COUNTS_MONOID : Monoid
    Accumulator description for count tables
LEVEL_INDENT : str
    Indentation printed once per nesting level
ZERO_DISPLAY : DisplayFunction
    Display function that does nothing
"""

from .functions import (
    ZERO_DISPLAY,
    DisplayFilter,
    DisplayFunction,
    Effect,
    StepHook,
    compose_displays,
    display_filter,
    make_display_function,
    max_report_level,
    report_types,
)
from .info import (
    LEVEL_INDENT,
    DisplayInfo,
    disp_iteration,
    disp_iteration_,
    info_diff_time,
    info_itr,
    info_string,
    info_text,
    info_type,
    join_info,
)
from .names import report_name, report_text
from .summary import (
    COUNTS_MONOID,
    CountInfo,
    merge_counts,
    render_summary_table,
    summary_table,
)

__all__: list[str] = [
    "compose_displays",
    "disp_iteration",
    "disp_iteration_",
    "display_filter",
    "info_diff_time",
    "info_itr",
    "info_string",
    "info_text",
    "info_type",
    "join_info",
    "make_display_function",
    "max_report_level",
    "merge_counts",
    "render_summary_table",
    "report_name",
    "report_text",
    "report_types",
    "summary_table",
    "CountInfo",
    "DisplayFilter",
    "DisplayFunction",
    "DisplayInfo",
    "Effect",
    "StepHook",
    "COUNTS_MONOID",
    "LEVEL_INDENT",
    "ZERO_DISPLAY",
]
