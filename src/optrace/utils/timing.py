"""Clock and time formatting helpers.

Routine Listings
----------------
default_clock : function
    Monotonic high-resolution clock in seconds.
format_time : function
    Render a duration in seconds in scientific notation.
TIME_DIGITS : int
    Digits after the decimal point used by format_time.
"""

import time

from beartype.typing import Callable

Clock = Callable[[], float]

TIME_DIGITS: int = 4

default_clock: Clock = time.perf_counter


def format_time(seconds: float, digits: int = TIME_DIGITS) -> str:
    """Render a duration in seconds in scientific notation.

    Parameters
    ----------
    seconds : float
        Duration to render.
    digits : int, optional
        Digits after the decimal point. Default is TIME_DIGITS.

    Returns
    -------
    text : str
        For example ``"1.2500e-03 sec"``.
    """
    return f"{float(seconds):.{digits}e} sec"
