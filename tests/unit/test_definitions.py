import re

import pytest

from uiquery.selectors import Selector, registry


def build(kind, locator=None, format=None, config=None, **options):
    sel = Selector(kind, format=format, config=config or {})
    expr = sel.compile(locator, **options)
    assert sel.errors == []
    return expr


@pytest.mark.parametrize(
    "kind, fmt",
    [(d.name, fmt) for d in registry for fmt in sorted(d.expressions)],
)
def test_every_builtin_compiles_a_well_typed_locator(kind, fmt):
    sel = Selector(kind, format=fmt, config={})
    assert sel.compile("x") is not None
    assert sel.errors == []


# ---------- basic ----------


def test_xpath_and_css_pass_through():
    assert build("xpath", ".//a") == ".//a"
    assert build("css", "a.btn") == "a.btn"


def test_id(found):
    assert found(build("id", "bio")) == {"bio"}
    assert found(build("id", re.compile("^ava")), exact=True) == {"avatar"}
    assert build("id", "bio", format="css") == "#bio"


def test_element(found):
    assert found(build("element", "input", type="checkbox")) == {"agree", "newsletter"}
    assert found(build("element", "input", format="css", type="checkbox"), css=True) == {"agree", "newsletter"}
    assert found(build("element", id="prices")) == {"prices"}
    assert build("element", format="css", id="prices") == "*#prices"


def test_element_false_or_none_require_the_attribute_to_be_absent(found):
    assert found(build("element", "a", href=False)) == {"nohref"}
    assert build("element", "a", format="css", href=None) == "a:not([href])"


# ---------- links and buttons ----------


def test_link_locators(found):
    assert found(build("link", "Home")) == {"home"}
    assert found(build("link", "home")) == {"home"}
    assert found(build("link", "Help icon")) == {"help"}
    assert found(build("link", "Get help")) == {"help"}


def test_link_href_filter(found):
    assert found(build("link")) == {"home", "help", "ext"}
    assert found(build("link", href=None)) == {"nohref"}
    assert found(build("link", href=False)) == {"home", "nohref", "help", "ext"}
    assert found(build("link", href="/help")) == {"help"}
    assert found(build("link", href=re.compile("/he"))) == {"help"}


def test_link_other_filters(found):
    assert found(build("link", title="Get help")) == {"help"}
    assert found(build("link", alt="Help icon")) == {"help"}
    assert found(build("link", target="_blank")) == {"ext"}


def test_link_with_test_id_and_aria(found, page):
    page.get_element_by_id("home").set("data-qa", "nav-home")
    page.get_element_by_id("home").set("aria-label", "Start page")
    assert found(build("link", "nav-home", config={"test_id": "data-qa"})) == {"home"}
    assert found(build("link", "Start page", config={"enable_aria_label": True})) == {"home"}
    assert found(build("link", "Start page")) == set()


def test_button_locators(found):
    assert found(build("button", "Save")) == {"save"}
    assert found(build("button", "Go now")) == {"btn-go"}
    assert found(build("button", "Search")) == {"img-btn"}
    assert found(build("button", "clear")) == {"reset"}


def test_button_filters(found):
    assert found(build("button", "Go now", disabled=True)) == {"btn-disabled"}
    assert found(build("button", "Go now", disabled="all")) == {"btn-go", "btn-disabled"}
    assert found(build("button", name="clear")) == {"reset"}
    assert found(build("button", type="submit")) == {"save"}
    assert found(build("button", value=re.compile("Cle"))) == {"reset"}


def test_link_or_button(found):
    assert found(build("link_or_button", "Home")) == {"home"}
    assert found(build("link_or_button", "Save")) == {"save"}
    assert found(build("link_or_button", "Go now", disabled="all")) == {"btn-go", "btn-disabled"}


# ---------- form fields ----------


def test_field_locators(found):
    assert found(build("field", "Name")) == {"name-input"}
    assert found(build("field", "Your name")) == {"name-input"}
    assert found(build("field", "Newsletter")) == {"newsletter"}
    assert found(build("field", "bio")) == {"bio"}
    assert found(build("field", "color")) == {"color"}


def test_field_excludes_hidden_unless_requested(found):
    assert found(build("field", "token")) == set()
    assert found(build("field", "token", type="hidden")) == {"hidden"}


def test_field_type_filter(found):
    assert found(build("field", type="textarea")) == {"bio"}
    assert found(build("field", type="select")) == {"color", "empty-select"}
    assert found(build("field", type="checkbox")) == {"agree", "newsletter"}


def test_field_state_filters(found):
    assert found(build("field", checked=True)) == {"agree"}
    assert found(build("field", type="checkbox", unchecked=True)) == {"newsletter"}
    assert found(build("field", multiple=True)) == {"avatar"}
    assert found(build("field", name=re.compile("^na"))) == {"name-input"}


def test_field_conflicting_checked_filters_are_reported():
    sel = Selector("field", config={})
    assert sel.compile(checked=True, unchecked=True) is not None
    assert len(sel.errors) == 1
    assert "checked" in sel.errors[0]


def test_fillable_field(found):
    # reset inputs are not excluded, like any other unlisted input type
    assert found(build("fillable_field")) == {"name-input", "bio", "browser", "reset"}
    assert found(build("fillable_field", "Name")) == {"name-input"}
    assert found(build("fillable_field", "agree")) == set()


def test_checkbox_and_radio_button(found):
    assert found(build("checkbox", "Newsletter")) == {"newsletter"}
    assert found(build("checkbox", option="yes")) == {"agree"}
    assert found(build("checkbox", checked=False)) == {"newsletter"}
    assert found(build("radio_button", "Small")) == {"size-s"}
    assert found(build("radio_button", "size")) == {"size-s"}


def test_file_field(found):
    assert found(build("file_field", "avatar")) == {"avatar"}
    assert found(build("file_field")) == {"avatar"}


def test_select_filters(found):
    assert found(build("select", "color")) == {"color"}
    assert found(build("select", with_options=["Red", "Green"])) == {"color"}
    assert found(build("select", with_options=["Red"])) == {"color", "empty-select"}
    assert found(build("select", options=["Red"])) == {"empty-select"}
    assert found(build("select", selected="Green")) == {"color"}
    assert found(build("select", with_selected=["Red"])) == set()


def test_select_rejects_non_list_options():
    sel = Selector("select", config={})
    sel.compile(options="Red")
    assert sel.errors == ["Invalid value 'Red' passed to expression filter options - expected list or tuple"]


def test_option_and_datalist_option(page):
    def texts(expr):
        return [n.text for n in page.xpath(expr.to_xpath())]

    assert texts(build("option", "Green")) == ["Green"]
    assert texts(build("option", selected=True)) == ["Green"]
    assert [n.get("value") for n in page.xpath(build("datalist_option", "Firefox").to_xpath())] == ["Firefox"]


def test_datalist_input(found):
    assert found(build("datalist_input", "browser")) == {"browser"}
    assert found(build("datalist_input", with_options=["Chrome"])) == {"browser"}
    assert found(build("datalist_input", with_options=["Firefox"])) == {"browser"}
    assert found(build("datalist_input", with_options=["Safari"])) == set()


def test_label(found):
    assert found(build("label", "Name")) == {"name-label"}
    assert found(build("label", **{"for": "name-field"})) == {"name-label"}
    assert found(build("label", **{"for": "news"})) == {"news-label"}


def test_fieldset(found):
    assert found(build("fieldset", "Shipping")) == {"shipping"}
    assert found(build("fieldset", "shipping")) == {"shipping"}
    assert found(build("fieldset", legend="Shipping")) == {"shipping"}


# ---------- containers ----------


def test_table(found):
    assert found(build("table", "Prices")) == {"prices"}
    assert found(build("table", "prices")) == {"prices"}
    assert found(build("table", caption="Prices")) == {"prices"}
    assert found(build("table", caption="Costs")) == set()


def test_frame(found):
    assert found(build("frame", "embed")) == {"frame1"}
    assert found(build("frame", "frame1")) == {"frame1"}
    assert found(build("frame", name="embed")) == {"frame1"}
    assert found(build("frame", name="other")) == set()
