"""
XPath package
-------------
Expression tree used by selector definitions to build XPath queries.
Import the module-level constructors from here, e.g.:

  from uiquery import xpath as X
  X.descendant("input")[X.attr("type").equals("text")]
"""

from .expression import (
    Expression,
    Union,
    all_of,
    anywhere,
    any_of,
    attr,
    axis,
    child,
    current,
    descendant,
    function,
    local_name,
    quote,
    raw,
    string,
    text,
    union,
)

__all__ = [
    "Expression",
    "Union",
    "all_of",
    "anywhere",
    "any_of",
    "attr",
    "axis",
    "child",
    "current",
    "descendant",
    "function",
    "local_name",
    "quote",
    "raw",
    "string",
    "text",
    "union",
]
