# uiquery/selectors/__init__.py
"""
Selectors package
-----------------
Selector definitions, the process-wide registry and the Selector instance
that compiles a locator plus filters into an XPath expression or a CSS
selector string. Importing the package registers the built-in kinds.
"""

from .definition import Definition, ExpressionFilter
from .errors import (
    FilterValidationError,
    LocatorShapeWarning,
    SelectorError,
    UnknownSelectorKind,
    UnsupportedFormat,
)
from .registry import SelectorRegistry, registry
from .selector import Selector
from . import definitions  # noqa: F401

__all__ = [
    "Definition",
    "ExpressionFilter",
    "FilterValidationError",
    "LocatorShapeWarning",
    "SelectorError",
    "UnknownSelectorKind",
    "UnsupportedFormat",
    "SelectorRegistry",
    "registry",
    "Selector",
]
