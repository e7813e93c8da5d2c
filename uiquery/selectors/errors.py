# uiquery/selectors/errors.py
from __future__ import annotations

from typing import List, Optional, Sequence


class SelectorError(Exception):
    """Base exception for selector definition and compilation errors."""


class UnknownSelectorKind(SelectorError, LookupError):
    """No selector is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown selector type ({name!r})")


class UnsupportedFormat(SelectorError, ValueError):
    """The selector has no expression for the requested format."""

    def __init__(self, name: str, format: Optional[str]) -> None:
        self.name = name
        self.format = format
        super().__init__(f"Selector {name!r} does not support {format}")


class FilterValidationError(SelectorError, ValueError):
    """
    One or more filter values were structurally invalid.

    Compilation never raises this; callers that want strict behaviour call
    `Selector.raise_for_errors()` after compiling.
    """

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "invalid filter values")


class LocatorShapeWarning(FutureWarning):
    """A locator does not have one of the types its selector accepts."""
