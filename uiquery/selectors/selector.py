# uiquery/selectors/selector.py
from __future__ import annotations

"""Selector instances
--------------------
A Selector binds a Definition to a configuration and an output format and
compiles locators into query expressions. Instances are cheap and meant to
be created per compilation.
"""

import warnings
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

from uiquery import xpath as X
from uiquery.selectors.builders import CSSBuilder, XPathBuilder
from uiquery.selectors.definition import Definition, ExpressionFilter
from uiquery.selectors.errors import FilterValidationError, LocatorShapeWarning, UnsupportedFormat
from uiquery.selectors.registry import SelectorRegistry, registry as default_registry
from uiquery.utils.config import QueryFormat, SelectorConfig, get_settings
from uiquery.utils.logger import get_logger

log = get_logger(__name__)

ConfigLike = Union[SelectorConfig, Mapping[str, Any], None]


def _coerce_config(config: ConfigLike) -> SelectorConfig:
    if config is None:
        return get_settings().selector_config()
    if isinstance(config, SelectorConfig):
        return config
    return SelectorConfig.model_validate(dict(config))


class Selector:
    def __init__(
        self,
        definition: Union[Definition, str],
        *,
        config: ConfigLike = None,
        format: Optional[Union[str, QueryFormat]] = None,
        registry: Optional[SelectorRegistry] = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry
        if not isinstance(definition, Definition):
            definition = self._registry[definition]
        self.definition = definition
        self.config = _coerce_config(config)
        if isinstance(format, QueryFormat):
            format = format.value
        # unknown names are rejected by compile with UnsupportedFormat
        self._format = format or None
        self.errors: List[str] = []

    def __repr__(self) -> str:
        return f"<Selector {self.name} format={self.format}>"

    # ---------- definition accessors ----------

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def label(self) -> str:
        return self.definition.label

    @property
    def locator_types(self):
        return self.definition.locator_types

    @property
    def expressions(self) -> Dict[str, Callable[..., Any]]:
        return self.definition.expressions

    @property
    def expression_filters(self) -> Dict[str, ExpressionFilter]:
        return self.definition.expression_filters

    @property
    def default_format(self) -> Optional[str]:
        return self.definition.default_format

    # ---------- configuration ----------

    @property
    def format(self) -> Optional[str]:
        return self._format or self.definition.default_format

    @property
    def enable_aria_label(self) -> bool:
        return self.config.enable_aria_label

    @property
    def test_id(self) -> Optional[str]:
        return self.config.test_id

    # ---------- compilation ----------

    def compile(self, locator: Any = None, **options: Any) -> Any:
        """
        Build the query expression for `locator` and filter `options`.

        Returns an XPath expression tree or a CSS string, or None when the
        selector has no format at all. Invalid filter values are recorded in
        `errors` instead of raising.
        """
        try:
            expression = self._compile(locator, options)
        except Exception:
            self._check_locator(locator, emit=False)
            raise
        self._check_locator(locator)
        return expression

    __call__ = compile

    def _compile(self, locator: Any, options: Dict[str, Any]) -> Any:
        fmt = self.format
        if not fmt:
            log.warning(f"Selector {self.name!r} has no format")
            return None
        if fmt not in self.expressions:
            raise UnsupportedFormat(self.name, fmt)

        log.debug(f"Compiling {self.name} ({fmt}) locator={locator!r} filters={sorted(options)}")
        options = self._resolve_options(options)
        for validate in self.definition.validators:
            validate(self, options)
        expression = self.expressions[fmt](self, locator, **options)
        return self._apply_expression_filters(expression, options)

    def _check_locator(self, locator: Any, emit: bool = True) -> None:
        """Log a locator of the wrong type; `emit` also issues a LocatorShapeWarning."""
        if self.locator_valid(locator):
            return
        msg = (
            f"Locator {type(locator).__name__} {locator!r} must {self.locator_description()}. "
            "This will raise an error in a future version."
        )
        log.warning(msg)
        if emit:
            # stacklevel points past _check_locator and compile at the caller
            warnings.warn(msg, LocatorShapeWarning, stacklevel=3)

    def _resolve_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        resolved = dict(options)
        for name, flt in self.expression_filters.items():
            if name not in resolved and flt.has_default:
                resolved[name] = flt.default
        for name in list(resolved):
            flt = self.expression_filters.get(name)
            if flt is not None and not flt.valid_value(resolved[name]):
                self.add_error(
                    f"Invalid value {resolved[name]!r} passed to expression filter {name} - "
                    f"expected {flt.describe_types()}"
                )
                del resolved[name]
        return resolved

    def _apply_expression_filters(self, expression: Any, options: Dict[str, Any]) -> Any:
        for name, flt in self.expression_filters.items():
            if flt.handled_by_expression or flt.apply is None or name not in options:
                continue
            if flt.skip(options[name]):
                continue
            expression = flt.apply(self, expression, options[name])

        # id and class work for every selector unless it handles them itself
        for name in ("id", "class"):
            if name in options and name not in self.expression_filters:
                expression = self.builder(expression).add_attribute_conditions(**{name: options[name]})
        return expression

    # ---------- errors ----------

    def add_error(self, error_msg: str) -> None:
        self.errors.append(error_msg)

    @contextmanager
    def with_filter_errors(self, errors: List[str]) -> Iterator[List[str]]:
        """Collect errors into `errors` for the duration of the block."""
        old_errors = self.errors
        self.errors = errors
        try:
            yield errors
        finally:
            self.errors = old_errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise FilterValidationError(self.errors)

    # ---------- composition ----------

    def expression_for(
        self,
        name: str,
        locator: Any = None,
        *,
        config: ConfigLike = None,
        format: Optional[Union[str, QueryFormat]] = None,
        **options: Any,
    ) -> Any:
        """Compile another selector kind with this selector's config and format."""
        other = Selector(
            name,
            config=config if config is not None else self.config,
            format=format or self.format,
            registry=self._registry,
        )
        expression = other.compile(locator, **options)
        self.errors.extend(other.errors)
        return expression

    def builder(self, expr: Any = None) -> Union[XPathBuilder, CSSBuilder]:
        fmt = self.format
        if fmt == QueryFormat.css.value:
            return CSSBuilder(expr)
        if fmt == QueryFormat.xpath.value:
            return XPathBuilder(expr)
        raise UnsupportedFormat(self.name, fmt)

    # ---------- locators ----------

    def locator_valid(self, locator: Any) -> bool:
        return self.definition.locator_valid(locator)

    def locator_description(self) -> str:
        return self.definition.locator_description()

    def locate_field(self, xpath: X.Expression, locator: Any, **_options: Any) -> X.Expression:
        """
        Restrict `xpath` to fields identified by `locator`: by id, name,
        placeholder, an associated label (for=id) or, when configured,
        aria-label and the test id attribute. Fields wrapped by a label with
        the locator as text are added as a union.
        """
        if locator is None:
            return xpath

        locator = str(locator)
        label_text = X.string().normalize_space().is_(locator)
        attr_matchers = X.any_of(
            X.attr("id").equals(locator),
            X.attr("name").equals(locator),
            X.attr("placeholder").equals(locator),
            X.attr("id").equals(X.anywhere("label")[label_text].attr("for")),
        )
        if self.enable_aria_label:
            attr_matchers |= X.attr("aria-label").is_(locator)
        if self.test_id:
            attr_matchers |= X.attr(self.test_id).equals(locator)

        return xpath[attr_matchers] + X.descendant("label")[label_text].join(xpath)

    def find_by_attr(self, attribute: str, value: Any) -> Optional[X.Expression]:
        matcher = self.attribute_matchers.get(attribute)
        if matcher is not None:
            return matcher(self, value)
        if value is None or value is False:
            return None
        return XPathBuilder().attribute_conditions({attribute: value})

    def find_by_class_attr(self, classes: Any) -> Optional[X.Expression]:
        if classes is None:
            return None
        return XPathBuilder().class_conditions(classes)

    # attribute name -> matcher consulted by find_by_attr before the generic one
    attribute_matchers: Dict[str, Callable[["Selector", Any], Optional[X.Expression]]] = {
        "class": find_by_class_attr,
    }
