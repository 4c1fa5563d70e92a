"""Common utility functions used throughout the code.

Routine Listings
----------------
default_clock : function
    Monotonic high-resolution clock used by the history context.
format_time : function
    Render a duration in seconds for display output.
Clock : TypeAlias
    Zero-argument callable returning seconds.
TIME_DIGITS : int
    Digits after the decimal point in rendered durations.
"""

from .timing import TIME_DIGITS, Clock, default_clock, format_time

__all__: list[str] = [
    "default_clock",
    "format_time",
    "Clock",
    "TIME_DIGITS",
]
