# uiquery/selectors/definitions/fields.py
from __future__ import annotations

"""Form selectors
----------------
field, fillable_field, radio_button, checkbox, select, option,
datalist_input, datalist_option, file_field, label and fieldset.

Field-like kinds resolve their locator with `Selector.locate_field`: id,
name, placeholder, associated label text and, when configured, aria-label
and the test id attribute.
"""

import re
from typing import Iterable

from uiquery import xpath as X
from uiquery.selectors.definition import Definition
from uiquery.selectors.registry import registry

LABELABLE_ELEMENTS = ("button", "input", "keygen", "meter", "output", "progress", "select", "textarea")

_TEXT = (str, re.Pattern)
_LIST = (list, tuple)


def _flag(name: str, value: bool) -> X.Expression:
    return X.attr(name) if value else ~X.attr(name)


def _checked_conflict(sel, options) -> None:
    checked, unchecked = options.get("checked"), options.get("unchecked")
    if checked is not None and unchecked is not None and bool(checked) == bool(unchecked):
        sel.add_error(f"Conflicting filters: checked={checked!r} and unchecked={unchecked!r}")


def add_field_filters(definition: Definition, names: Iterable[str]) -> None:
    """Declare the shared form-field filters listed in `names` on `definition`."""
    names = set(names)

    for attribute in ("name", "placeholder"):
        if attribute in names:
            definition.expression_filter(attribute, *_TEXT)(
                lambda sel, expr, value, attribute=attribute: sel.builder(expr).add_attribute_conditions(
                    **{attribute: value}
                )
            )

    if "checked" in names:
        @definition.expression_filter("checked", bool)
        def _checked(sel, expr, value):
            return expr[_flag("checked", value)]

    if "unchecked" in names:
        @definition.expression_filter("unchecked", bool)
        def _unchecked(sel, expr, value):
            return expr[_flag("checked", not value)]

    if {"checked", "unchecked"} <= names:
        definition.validator(_checked_conflict)

    if "disabled" in names:
        @definition.expression_filter("disabled", bool, default=False, skip_if="all")
        def _disabled(sel, expr, value):
            return expr[_flag("disabled", value)]

    for attribute in ("multiple", "readonly"):
        if attribute in names:
            definition.expression_filter(attribute, bool)(
                lambda sel, expr, value, attribute=attribute: expr[_flag(attribute, value)]
            )


def _type_filter(definition: Definition, element_types: Iterable[str]) -> None:
    element_types = tuple(element_types)

    @definition.expression_filter("type", str)
    def _type(sel, expr, value):
        if value in element_types:
            return expr.self_axis(value)
        return expr[X.attr("type").equals(value)]


def _value_option_filter(definition: Definition) -> None:
    @definition.expression_filter("option", *_TEXT)
    def _option(sel, expr, value):
        return sel.builder(expr).add_attribute_conditions(value=value)


# ---------- field ----------

field = registry.add(
    "field",
    locator_types=(str,),
    description="Input (not submit, image or hidden), textarea and select fields",
)


@field.xpath()
def _field(sel, locator, type=None, **options):
    invalid_types = ["submit", "image"]
    if str(type) != "hidden":
        invalid_types.append("hidden")
    xpath = X.descendant("input", "textarea", "select")[~X.attr("type").one_of(*invalid_types)]
    return sel.locate_field(xpath, locator, **options)


_type_filter(field, ("textarea", "select"))
add_field_filters(field, ("name", "placeholder", "checked", "unchecked", "disabled", "multiple", "readonly"))


# ---------- fillable_field ----------

fillable_field = registry.add(
    "fillable_field",
    locator_types=(str,),
    description="Text fillable fields: textarea and input not of type submit, image, radio, checkbox, hidden or file",
)


@fillable_field.xpath()
def _fillable_field(sel, locator, **options):
    xpath = X.descendant("input", "textarea")[
        ~X.attr("type").one_of("submit", "image", "radio", "checkbox", "hidden", "file")
    ]
    return sel.locate_field(xpath, locator, **options)


_type_filter(fillable_field, ("textarea",))
add_field_filters(fillable_field, ("name", "placeholder", "disabled", "multiple", "readonly"))


# ---------- radio_button / checkbox ----------

def _toggle(name: str, input_type: str, description: str) -> Definition:
    definition = registry.add(name, locator_types=(str,), description=description)

    @definition.xpath()
    def _toggle_xpath(sel, locator, **options):
        xpath = X.descendant("input")[X.attr("type").equals(input_type)]
        return sel.locate_field(xpath, locator, **options)

    add_field_filters(definition, ("name", "checked", "unchecked", "disabled"))
    _value_option_filter(definition)
    return definition


radio_button = _toggle("radio_button", "radio", "Radio buttons by id, name, test id or associated label text")
checkbox = _toggle("checkbox", "checkbox", "Checkboxes by id, name, test id or associated label text")


# ---------- select / option ----------

select = registry.add(
    "select",
    locator_types=(str,),
    description="Select elements by id, name, placeholder, test id or associated label text",
)


@select.xpath()
def _select(sel, locator, **options):
    return sel.locate_field(X.descendant("select"), locator, **options)


add_field_filters(select, ("name", "placeholder", "disabled", "multiple"))


def _with_options(sel, expr, texts, **option_filters):
    for text in texts:
        expr = expr.where(sel.expression_for("option", text, **option_filters))
    return expr


@select.expression_filter("with_options", *_LIST)
def _select_with_options(sel, expr, value):
    return _with_options(sel, expr, value)


@select.expression_filter("options", *_LIST)
def _select_options(sel, expr, value):
    expr = _with_options(sel, expr, value)
    return expr[X.descendant("option").count().equals(len(value))]


@select.expression_filter("with_selected", str, *_LIST)
def _select_with_selected(sel, expr, value):
    texts = [value] if isinstance(value, str) else value
    return _with_options(sel, expr, texts, selected=True)


@select.expression_filter("selected", str, *_LIST)
def _select_selected(sel, expr, value):
    texts = [value] if isinstance(value, str) else value
    expr = _with_options(sel, expr, texts, selected=True)
    return expr[X.descendant("option")[X.attr("selected")].count().equals(len(texts))]


option = registry.add("option", locator_types=(str,), description="Option elements by text")


@option.xpath()
def _option(sel, locator, **_):
    xpath = X.descendant("option")
    if locator is not None:
        xpath = xpath[X.string().normalize_space().is_(str(locator))]
    return xpath


for _attribute in ("disabled", "selected"):
    option.expression_filter(_attribute, bool)(
        lambda sel, expr, value, attribute=_attribute: expr[_flag(attribute, value)]
    )


# ---------- datalist ----------

datalist_option = registry.add(
    "datalist_option",
    locator_types=(str,),
    description="Datalist options by text or value",
)


@datalist_option.xpath()
def _datalist_option(sel, locator, **_):
    xpath = X.descendant("option")
    if locator is not None:
        locator = str(locator)
        xpath = xpath[X.string().normalize_space().is_(locator) | X.attr("value").equals(locator)]
    return xpath


datalist_input = registry.add(
    "datalist_input",
    locator_types=(str,),
    description="Inputs bound to a datalist, by id, name, placeholder or associated label text",
)


@datalist_input.xpath()
def _datalist_input(sel, locator, **options):
    xpath = X.descendant("input")[X.attr("list")]
    return sel.locate_field(xpath, locator, **options)


add_field_filters(datalist_input, ("name", "placeholder", "disabled"))


@datalist_input.expression_filter("with_options", *_LIST)
def _datalist_with_options(sel, expr, value):
    for text in value:
        datalist = X.anywhere("datalist")[sel.expression_for("datalist_option", text)]
        expr = expr.where(X.attr("list").equals(datalist.attr("id")))
    return expr


# ---------- file_field ----------

file_field = registry.add(
    "file_field",
    locator_types=(str,),
    description="File inputs by id, name, test id or associated label text",
)


@file_field.xpath()
def _file_field(sel, locator, **options):
    xpath = X.descendant("input")[X.attr("type").equals("file")]
    return sel.locate_field(xpath, locator, **options)


add_field_filters(file_field, ("name", "disabled", "multiple"))


# ---------- label ----------

label = registry.add(
    "label",
    locator_types=(str,),
    description="Labels by text, id or test id; `for` matches the labelled element's id",
)


@label.xpath("for")
def _label(sel, locator, **options):
    xpath = X.descendant("label")
    if locator is not None:
        locator = str(locator)
        matchers = X.string().normalize_space().is_(locator) | X.attr("id").equals(locator)
        if sel.test_id:
            matchers |= X.attr(sel.test_id).equals(locator)
        xpath = xpath[matchers]

    for_option = options.get("for")
    if for_option:
        with_attr = sel.find_by_attr("for", for_option)
        wrapped = ~X.attr("for") & X.descendant(*LABELABLE_ELEMENTS)[sel.find_by_attr("id", for_option)]
        xpath = xpath[with_attr | wrapped]
    return xpath


label.expression_filter("for", *_TEXT)


# ---------- fieldset ----------

fieldset = registry.add(
    "fieldset",
    locator_types=(str,),
    description="Fieldsets by id, test id or the text of their legend",
)


@fieldset.xpath("legend")
def _fieldset(sel, locator, legend=None, **_):
    xpath = X.descendant("fieldset")
    if locator is not None:
        locator = str(locator)
        matchers = X.attr("id").equals(locator) | X.child("legend")[X.string().normalize_space().is_(locator)]
        if sel.test_id:
            matchers |= X.attr(sel.test_id).equals(locator)
        xpath = xpath[matchers]
    if legend:
        xpath = xpath[X.child("legend")[X.string().normalize_space().is_(legend)]]
    return xpath


fieldset.expression_filter("legend", str)
fieldset.expression_filter("disabled", bool)(lambda sel, expr, value: expr[_flag("disabled", value)])
