# uiquery/selectors/definitions/clickable.py
from __future__ import annotations

"""Clickable selectors: link, button, link_or_button."""

import re

from uiquery import xpath as X
from uiquery.selectors.registry import registry

BUTTON_INPUT_TYPES = ("submit", "reset", "image", "button")


def _text_is(locator: str) -> X.Expression:
    return X.string().normalize_space().is_(locator)


def _img_alt_is(locator: str) -> X.Expression:
    return X.descendant("img")[X.attr("alt").is_(locator)]


# ---------- link ----------

link = registry.add(
    "link",
    locator_types=(str,),
    description="Links by id, text, title, nested image alt or test id",
)


@link.xpath("href", "alt", "title")
def _link(sel, locator, href=True, alt=None, title=None, **_):
    xpath = X.descendant("a")
    if href is not False:
        xpath = sel.builder(xpath).add_attribute_conditions(href=href)

    if locator is not None:
        locator = str(locator)
        matchers = X.any_of(
            X.attr("id").equals(locator),
            _text_is(locator),
            X.attr("title").is_(locator),
            _img_alt_is(locator),
        )
        if sel.enable_aria_label:
            matchers |= X.attr("aria-label").is_(locator)
        if sel.test_id:
            matchers |= X.attr(sel.test_id).equals(locator)
        xpath = xpath[matchers]

    xpath = xpath.where(sel.find_by_attr("title", title))
    if alt:
        xpath = xpath[X.descendant("img")[X.attr("alt").equals(alt)]]
    return xpath


# href: True = present, None = absent, False = no constraint
link.expression_filter("href", str, re.Pattern, bool, type(None), default=True)
link.expression_filter("alt", str)
link.expression_filter("title", str, re.Pattern)


@link.expression_filter("target", str)
def _link_target(sel, expr, value):
    return expr[X.attr("target").equals(value)]


# ---------- button ----------

button = registry.add(
    "button",
    locator_types=(str,),
    description="Buttons: input of type submit, reset, image or button, and button elements",
)


@button.xpath("value", "title", "type", "name")
def _button(sel, locator, **options):
    input_btn = X.descendant("input")[X.attr("type").one_of(*BUTTON_INPUT_TYPES)]
    btn = X.descendant("button")
    image_btn = X.descendant("input")[X.attr("type").equals("image")]

    if locator is not None:
        locator = str(locator)
        matchers = X.any_of(
            X.attr("id").equals(locator),
            X.attr("name").equals(locator),
            X.attr("value").is_(locator),
            X.attr("title").is_(locator),
        )
        if sel.enable_aria_label:
            matchers |= X.attr("aria-label").is_(locator)
        if sel.test_id:
            matchers |= X.attr(sel.test_id).equals(locator)
        input_btn = input_btn[matchers]
        btn = btn[matchers | _text_is(locator) | _img_alt_is(locator)]

        alt_matches = X.attr("alt").is_(locator)
        if sel.enable_aria_label:
            alt_matches |= X.attr("aria-label").is_(locator)
        image_btn = image_btn[alt_matches]

    xpath = input_btn + btn + image_btn
    for name in ("value", "title", "type", "name"):
        xpath = xpath.where(sel.find_by_attr(name, options.get(name)))
    return xpath


button.expression_filter("value", str, re.Pattern)
button.expression_filter("title", str, re.Pattern)
button.expression_filter("type", str)
button.expression_filter("name", str, re.Pattern)


@button.expression_filter("disabled", bool, default=False, skip_if="all")
def _button_disabled(sel, expr, value):
    return expr[X.attr("disabled") if value else ~X.attr("disabled")]


# ---------- link_or_button ----------

link_or_button = registry.add(
    "link_or_button",
    locator_types=(str,),
    label="link or button",
    description="Union of the link and button selectors",
)


@link_or_button.xpath("id", "class", "disabled")
def _link_or_button(sel, locator, **options):
    return X.union(*(sel.expression_for(name, locator, **options) for name in ("link", "button")))


link_or_button.expression_filter("disabled", bool, skip_if="all")
