# uiquery/selectors/definition.py
from __future__ import annotations

"""Selector definitions
----------------------
A Definition describes one selector kind: which locator types it accepts,
how to build its expression for each output format, and which filters it
understands. Definitions are plain records extended through decorators:

    link = registry.add("link", locator_types=(str,))

    @link.xpath("href", "title")
    def _link(sel, locator, href=True, title=None, **_):
        ...

    @link.expression_filter("target", str)
    def _target(sel, expr, value):
        return expr[X.attr("target").equals(value)]
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from uiquery.utils.config import QueryFormat

# (selector, locator, **options) -> expression
ExpressionBuilder = Callable[..., Any]
# (selector, expression, value) -> expression
FilterFunction = Callable[[Any, Any, Any], Any]
# (selector, options) -> None; records problems through selector.add_error
OptionsValidator = Callable[[Any, Dict[str, Any]], None]

LocatorType = Union[type, str]

_UNSET: Any = object()


def _type_name(t: type) -> str:
    if t is re.Pattern:
        return "Pattern"
    return t.__name__


@dataclass
class ExpressionFilter:
    name: str
    apply: Optional[FilterFunction] = None
    valid_types: Tuple[type, ...] = ()
    default: Any = _UNSET
    skip_if: Any = _UNSET
    handled_by_expression: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not _UNSET

    def skip(self, value: Any) -> bool:
        return self.skip_if is not _UNSET and value == self.skip_if

    def valid_value(self, value: Any) -> bool:
        if not self.valid_types or self.skip(value):
            return True
        return isinstance(value, self.valid_types)

    def describe_types(self) -> str:
        return " or ".join(_type_name(t) for t in self.valid_types) or "any value"


class Definition:
    def __init__(
        self,
        name: str,
        *,
        locator_types: Sequence[LocatorType] = (),
        default_format: Optional[Union[str, QueryFormat]] = None,
        label: Optional[str] = None,
        description: Optional[str] = None,
        matcher: Optional[Callable[[Any], bool]] = None,
    ) -> None:
        self.name = name
        self.locator_types: Tuple[LocatorType, ...] = tuple(locator_types)
        self.label = label or name.replace("_", " ")
        self.matcher = matcher
        self.expressions: Dict[str, ExpressionBuilder] = {}
        self.expression_filters: Dict[str, ExpressionFilter] = {}
        self.validators: List[OptionsValidator] = []
        self._default_format = QueryFormat(default_format).value if default_format else None
        self._description = description

    def __repr__(self) -> str:
        return f"<Definition {self.name} formats={sorted(self.expressions)}>"

    # ---------- formats ----------

    @property
    def default_format(self) -> Optional[str]:
        if self._default_format:
            return self._default_format
        if len(self.expressions) == 1:
            return next(iter(self.expressions))
        if QueryFormat.xpath.value in self.expressions:
            return QueryFormat.xpath.value
        return None

    @default_format.setter
    def default_format(self, value: Optional[Union[str, QueryFormat]]) -> None:
        self._default_format = QueryFormat(value).value if value else None

    def supports(self, format: Optional[str]) -> bool:
        return format in self.expressions

    def expression(self, format: Union[str, QueryFormat], *filter_names: str) -> Callable[[ExpressionBuilder], ExpressionBuilder]:
        """
        Register the expression builder for `format`. `filter_names` are
        filters the builder consumes itself; they are declared but not applied
        again after the builder returns.
        """
        fmt = QueryFormat(format).value

        def decorator(fn: ExpressionBuilder) -> ExpressionBuilder:
            self.expressions[fmt] = fn
            for name in filter_names:
                flt = self.expression_filters.setdefault(name, ExpressionFilter(name))
                flt.handled_by_expression = True
            return fn

        return decorator

    def xpath(self, *filter_names: str):
        return self.expression(QueryFormat.xpath, *filter_names)

    def css(self, *filter_names: str):
        return self.expression(QueryFormat.css, *filter_names)

    # ---------- filters ----------

    def expression_filter(
        self,
        name: str,
        *valid_types: type,
        default: Any = _UNSET,
        skip_if: Any = _UNSET,
    ) -> Callable[[FilterFunction], FilterFunction]:
        """
        Declare a filter. Used bare it only declares (and type-checks) the
        filter; used as a decorator the function is applied to the built
        expression whenever the filter is given.
        """
        existing = self.expression_filters.get(name)
        flt = ExpressionFilter(
            name,
            valid_types=tuple(valid_types),
            default=default,
            skip_if=skip_if,
            handled_by_expression=bool(existing and existing.handled_by_expression),
        )
        self.expression_filters[name] = flt

        def decorator(fn: FilterFunction) -> FilterFunction:
            flt.apply = fn
            return fn

        return decorator

    def validator(self, fn: OptionsValidator) -> OptionsValidator:
        self.validators.append(fn)
        return fn

    @property
    def filter_names(self) -> List[str]:
        return list(self.expression_filters)

    # ---------- locators ----------

    def locator_valid(self, locator: Any) -> bool:
        if locator is None or not self.locator_types:
            return True
        for type_or_capability in self.locator_types:
            if isinstance(type_or_capability, str):
                if hasattr(locator, type_or_capability):
                    return True
            elif isinstance(locator, type_or_capability):
                return True
        return False

    def locator_description(self) -> str:
        types = [_type_name(t) for t in self.locator_types if not isinstance(t, str)]
        capabilities = [t for t in self.locator_types if isinstance(t, str)]
        parts = []
        if types:
            parts.append("be an instance of " + " or ".join(types))
        if capabilities:
            parts.append("respond to " + " or ".join(capabilities))
        return " or ".join(parts)

    def match(self, locator: Any) -> bool:
        """True when this definition claims `locator` by its shape."""
        if self.matcher is not None:
            return bool(self.matcher(locator))
        if locator is None or not self.locator_types:
            return False
        return self.locator_valid(locator)

    # ---------- docs ----------

    @property
    def description(self) -> str:
        if self._description:
            return self._description
        if not self.expression_filters:
            return ""
        return "Filters: " + ", ".join(
            f"{f.name} ({f.describe_types()})" if f.valid_types else f.name
            for f in self.expression_filters.values()
        )
