"""Names and text renderings of reported values.

Extended Summary
----------------
Display functions need two things from any value passed through
``report``: a short name that identifies what kind of value it is, and
a textual rendering. Both are ``functools.singledispatch`` generic
functions so that collaborators register their own types instead of
the engine inspecting values.

Routine Listings
----------------
report_name : function
    Short name used to label and group a reported value.
report_text : function
    Text rendering of a reported value.

Examples
--------
>>> report_name("line search")
'line search'
>>> report_name(3.0)
'float'
>>> @report_name.register
... def _(value: MyState) -> str:
...     return "my-state"
"""

from functools import singledispatch

from beartype.typing import Any


@singledispatch
def report_name(value: Any) -> str:
    """Short name used to label and group a reported value.

    Strings name themselves, so a phase label such as ``"newton"``
    becomes its own group in a summary table. Anything else defaults to
    the name of its type.
    """
    return type(value).__name__


@report_name.register
def _(value: str) -> str:
    return value


@singledispatch
def report_text(value: Any) -> str:
    """Text rendering of a reported value, ``repr`` unless registered."""
    return repr(value)


@report_text.register
def _(value: str) -> str:
    return value
