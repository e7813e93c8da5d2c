# uiquery/selectors/definitions/containers.py
from __future__ import annotations

"""Container selectors: table, frame."""

from uiquery import xpath as X
from uiquery.selectors.registry import registry


def _caption_is(text: str) -> X.Expression:
    return X.descendant("caption")[X.string().normalize_space().is_(text)]


# ---------- table ----------

table = registry.add(
    "table",
    locator_types=(str,),
    description="Tables by id, caption text or test id",
)


@table.xpath("caption")
def _table(sel, locator, caption=None, **_):
    xpath = X.descendant("table")
    if locator is not None:
        locator = str(locator)
        matchers = X.attr("id").equals(locator) | _caption_is(locator)
        if sel.test_id:
            matchers |= X.attr(sel.test_id).equals(locator)
        xpath = xpath[matchers]
    if caption:
        xpath = xpath[_caption_is(caption)]
    return xpath


table.expression_filter("caption", str)


# ---------- frame ----------

frame = registry.add(
    "frame",
    locator_types=(str,),
    description="iframe and frame elements by id or name",
)


@frame.xpath("name")
def _frame(sel, locator, name=None, **_):
    xpath = X.descendant("iframe") + X.descendant("frame")
    if locator is not None:
        locator = str(locator)
        xpath = xpath[X.attr("id").equals(locator) | X.attr("name").equals(locator)]
    return xpath.where(sel.find_by_attr("name", name))


frame.expression_filter("name", str)
