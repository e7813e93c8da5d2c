# uiquery/selectors/definitions/basic.py
from __future__ import annotations

"""Raw and generic selectors: xpath, css, id, element."""

import re

from uiquery import xpath as X
from uiquery.selectors.registry import registry


# ---------- xpath ----------

xpath_selector = registry.add(
    "xpath",
    locator_types=(str, "to_xpath"),
    description="Select elements by XPath expression",
)


@xpath_selector.xpath()
def _xpath(sel, locator, **_):
    return locator


# ---------- css ----------

css_selector = registry.add(
    "css",
    locator_types=(str,),
    description="Select elements by CSS selector",
)


@css_selector.css()
def _css(sel, locator, **_):
    return locator


# ---------- id ----------

id_selector = registry.add(
    "id",
    locator_types=(str, re.Pattern, X.Expression),
    description="Select element by id (str, regex or XPath expression)",
)


@id_selector.xpath()
def _id_xpath(sel, locator, **_):
    return sel.builder(X.descendant()).add_attribute_conditions(id=locator)


@id_selector.css()
def _id_css(sel, locator, **_):
    return sel.builder().add_attribute_conditions(id=locator)


# ---------- element ----------

element = registry.add(
    "element",
    locator_types=(str,),
    description="Elements by tag name ('*' or none for any); every filter matches an attribute",
)


def _tag(locator) -> str:
    return str(locator) if locator not in (None, "") else "*"


@element.xpath("id", "class")
def _element_xpath(sel, locator, **attributes):
    tag = _tag(locator)
    xpath = X.descendant().where(X.local_name().equals(tag) if tag != "*" else None)
    return sel.builder(xpath).add_attribute_conditions(**attributes)


@element.css("id", "class")
def _element_css(sel, locator, **attributes):
    return sel.builder(_tag(locator)).add_attribute_conditions(**attributes)
